# subject_memory/core/exceptions.py
"""
All exceptions for subject_memory.

Hierarchy:
    SubjectMemoryError
    ├── PreconditionError - Work refused before any record is processed
    │   ├── ExtractorUnavailableError - No keyword extractor configured
    │   └── ScopeNotEnabledError - Extraction not enabled for the scope
    ├── ExtractionError - A single record's keyword extraction failed
    ├── StoreError - Subject store implementation failure
    └── ConfigError - Configuration failures
        ├── ConfigNotFoundError
        ├── ConfigParseError
        └── ConfigValidationError

Lookups that find nothing are not errors: they return None, False or an
empty list.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class SubjectMemoryError(Exception):
    """
    Base exception for all subject_memory errors.

    Examples:
        >>> try:
        ...     memory.extract_and_store("scope-1", records)
        ... except SubjectMemoryError as e:
        ...     print(f"Extraction refused: {e}")
    """

    pass


# =============================================================================
# Precondition Errors
# =============================================================================


class PreconditionError(SubjectMemoryError):
    """A required collaborator or setting is missing; nothing was processed."""

    pass


class ExtractorUnavailableError(PreconditionError):
    """No keyword extractor is available."""

    pass


class ScopeNotEnabledError(PreconditionError):
    """Subject extraction has not been enabled for the requested scope."""

    def __init__(self, scope_id: str):
        self.scope_id = scope_id
        super().__init__(f"Subject extraction not enabled for scope: {scope_id}")


# =============================================================================
# Per-item Errors
# =============================================================================


class ExtractionError(SubjectMemoryError):
    """Keyword extraction failed for a single record."""

    def __init__(self, message: str, record_id: Optional[str] = None):
        self.record_id = record_id
        super().__init__(message)


class StoreError(SubjectMemoryError):
    """The subject store could not complete an operation."""

    pass


# =============================================================================
# Config Errors
# =============================================================================


class ConfigError(SubjectMemoryError):
    """Base error for configuration issues."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path:
            message = f"{message} (file: {path})"
        super().__init__(message)


class ConfigNotFoundError(ConfigError):
    """Raised when a config file doesn't exist."""

    pass


class ConfigParseError(ConfigError):
    """Raised when YAML parsing fails."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when config doesn't match schema."""

    pass


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
