# subject_memory/config/schema.py
"""
Configuration schema for subject_memory.

Schema hierarchy:
- SubjectMemoryConfig: The main config consumed by SubjectMemory
- ExtractionConfig: Subject extraction pipeline settings
- IndexConfig: Similarity index query settings
- LoggingConfig: Logging settings
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Extraction Configuration
# =============================================================================


class ExtractionConfig(BaseModel):
    """
    Settings for turning a batch of text records into candidate subjects.

    Examples:
        >>> ExtractionConfig(min_confidence=0.3)
    """

    max_keywords_per_record: int = Field(
        default=10, ge=1, description="Keywords requested from the extractor per record"
    )
    label_keywords: int = Field(
        default=3, ge=1, description="Most frequent keywords that form a subject label"
    )
    min_confidence: float = Field(
        default=0.5, ge=0.0, le=1.0, description="Candidates below this are discarded"
    )
    description_chars: int = Field(
        default=150, ge=1, description="Record excerpt length used as description"
    )
    excerpt_chars: int = Field(
        default=200, ge=1, description="Record excerpt length stored in metadata"
    )

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Index Configuration
# =============================================================================


class IndexConfig(BaseModel):
    """Settings for keyword similarity queries."""

    default_limit: int = Field(default=10, ge=1, description="Default search result limit")
    context_limit: int = Field(
        default=5, ge=1, description="Default limit for context_for_text()"
    )
    min_partial_match_length: int = Field(
        default=0,
        ge=0,
        description=(
            "Shortest keyword allowed to count as a substring match "
            "(0 keeps every partial match)"
        ),
    )

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Root log level"
    )

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Main Configuration
# =============================================================================


class SubjectMemoryConfig(BaseModel):
    """
    Main configuration for SubjectMemory.

    Examples:
        Default config:
        >>> config = SubjectMemoryConfig()

        Custom config:
        >>> config = SubjectMemoryConfig(
        ...     extraction=ExtractionConfig(min_confidence=0.3),
        ...     index=IndexConfig(default_limit=20),
        ... )
    """

    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


__all__ = [
    "SubjectMemoryConfig",
    "ExtractionConfig",
    "IndexConfig",
    "LoggingConfig",
]
