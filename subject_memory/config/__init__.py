# subject_memory/config/__init__.py
"""
Configuration management for subject_memory.

Usage:
    from subject_memory.config import load_config

    config = load_config()  # package defaults
    limit = config.index.default_limit  # always exists
"""

from .loader import deep_merge, load_config, load_defaults
from .schema import ExtractionConfig, IndexConfig, LoggingConfig, SubjectMemoryConfig

__all__ = [
    "load_config",
    "load_defaults",
    "deep_merge",
    "SubjectMemoryConfig",
    "ExtractionConfig",
    "IndexConfig",
    "LoggingConfig",
]
