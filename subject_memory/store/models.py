# subject_memory/store/models.py
"""
Data models for subjects and subject store writes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, Optional

from subject_memory.index.normalize import normalize

SourceKind = Literal["scope", "manual", "import"]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    return utc_now()


@dataclass
class SubjectSource:
    """
    Where a subject was seen.

    Attributes:
        kind: "scope" for extraction runs, "manual" or "import" otherwise
        source_id: Scope id, user id, import batch id, ...
        extracted_at: When the source produced the subject
        confidence: Extraction confidence, when known
    """

    kind: SourceKind
    source_id: str
    extracted_at: datetime = field(default_factory=utc_now)
    confidence: Optional[float] = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.kind, self.source_id)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "kind": self.kind,
            "source_id": self.source_id,
            "extracted_at": self.extracted_at.isoformat(),
        }
        if self.confidence is not None:
            data["confidence"] = self.confidence
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SubjectSource":
        return cls(
            kind=data["kind"],
            source_id=data["source_id"],
            extracted_at=_parse_datetime(data.get("extracted_at")),
            confidence=data.get("confidence"),
        )


@dataclass
class Subject:
    """
    A deduplicated topic, enriched with keywords over time.

    Attributes:
        id: Stable identifier
        label: Human-readable label
        description: Free-text description
        keywords: Associated keywords, deduplicated, in insertion order
        metadata: String-valued key/value metadata
        sources: Every place this subject was seen
        created_at: Creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    id: str
    label: str
    description: str = ""
    keywords: list[str] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)
    sources: list[SubjectSource] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for YAML/JSON serialization."""
        return {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "keywords": list(self.keywords),
            "metadata": dict(self.metadata),
            "sources": [source.to_dict() for source in self.sources],
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Subject":
        """Create from dictionary (YAML/JSON deserialization)."""
        return cls(
            id=data["id"],
            label=data.get("label", ""),
            description=data.get("description", ""),
            keywords=list(data.get("keywords", [])),
            metadata={str(k): str(v) for k, v in (data.get("metadata") or {}).items()},
            sources=[SubjectSource.from_dict(s) for s in data.get("sources", [])],
            created_at=_parse_datetime(data.get("created_at")),
            updated_at=_parse_datetime(data.get("updated_at")),
        )

    def add_keywords(self, keywords: list[str]) -> None:
        """
        Append keywords not already present.

        Keywords are compared in normalized form, so "RUST" is not added next
        to "rust". Keywords that normalize to "" are skipped.
        """
        present = {normalize(existing) for existing in self.keywords}
        for keyword in keywords:
            key = normalize(keyword)
            if key and key not in present:
                present.add(key)
                self.keywords.append(keyword)

    def add_source(self, source: SubjectSource) -> None:
        """Add a source unless one with the same kind and id exists."""
        if all(existing.key != source.key for existing in self.sources):
            self.sources.append(source)


@dataclass
class SubjectDraft:
    """
    Fields for a store create or update.

    On create, `label` is required and `subject_id` is optional (the store
    derives one). On update, None means "leave unchanged".
    """

    label: Optional[str] = None
    description: Optional[str] = None
    keywords: Optional[list[str]] = None
    metadata: Optional[dict[str, str]] = None
    sources: Optional[list[SubjectSource]] = None
    subject_id: Optional[str] = None


@dataclass(frozen=True)
class StoreResult:
    """Outcome of a store write."""

    subject_id: str
    created: bool


__all__ = ["Subject", "SubjectSource", "SubjectDraft", "StoreResult", "SourceKind", "utc_now"]
