# subject_memory/extraction/models.py
"""
Data models for subject extraction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass
class TextRecord:
    """
    One text record (a chat message, a note, ...).

    Attributes:
        id: Record identifier
        text: Record content
        timestamp: When the record was written, used for newest-first ordering
        author: Optional author id
    """

    id: str
    text: str
    timestamp: Optional[datetime] = None
    author: Optional[str] = None


@dataclass
class ExtractedSubject:
    """
    A candidate subject produced from one record.

    Attributes:
        label: Space-joined top keywords
        keywords: Normalized keywords forming the label
        confidence: Keyword frequency score in [0.0, 1.0]
        description: Short excerpt of the record
        record_excerpt: Longer excerpt, kept as metadata
        record_id: Record the candidate came from
    """

    label: str
    keywords: list[str]
    confidence: float
    description: str = ""
    record_excerpt: str = ""
    record_id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "keywords": list(self.keywords),
            "confidence": self.confidence,
            "description": self.description,
            "record_excerpt": self.record_excerpt,
            "record_id": self.record_id,
        }


@dataclass(frozen=True)
class RecordFailure:
    """A record skipped during extraction, with the reason."""

    record_id: str
    error: str


@dataclass
class PipelineOutput:
    """
    Result of one pipeline run.

    Attributes:
        candidates: Every candidate above the confidence threshold
        subjects: Candidates after label deduplication
        total_records: Records in the batch (including failed ones)
        failures: Records that produced no keywords
        elapsed_ms: Wall time of the run
    """

    candidates: list[ExtractedSubject] = field(default_factory=list)
    subjects: list[ExtractedSubject] = field(default_factory=list)
    total_records: int = 0
    failures: list[RecordFailure] = field(default_factory=list)
    elapsed_ms: float = 0.0


@dataclass
class ExtractionResult:
    """
    What extract_and_store() reports back.

    Attributes:
        subjects: Deduplicated subjects found in the batch
        stored_ids: Subject ids written to the store
        total_records: Records processed
        failures: Records skipped
        processing_time_ms: Wall time, extraction plus persistence
    """

    subjects: list[ExtractedSubject] = field(default_factory=list)
    stored_ids: list[str] = field(default_factory=list)
    total_records: int = 0
    failures: list[RecordFailure] = field(default_factory=list)
    processing_time_ms: float = 0.0


__all__ = [
    "TextRecord",
    "ExtractedSubject",
    "RecordFailure",
    "PipelineOutput",
    "ExtractionResult",
]
