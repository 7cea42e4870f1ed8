# subject_memory/core/__init__.py
"""Core building blocks shared across subject_memory."""

from .exceptions import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    ExtractionError,
    ExtractorUnavailableError,
    PreconditionError,
    ScopeNotEnabledError,
    StoreError,
    SubjectMemoryError,
)

__all__ = [
    "SubjectMemoryError",
    "PreconditionError",
    "ExtractorUnavailableError",
    "ScopeNotEnabledError",
    "ExtractionError",
    "StoreError",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
]
