# subject_memory/index/models.py
"""
Data models for the subject index.

IndexEntry is a value copy of a subject projection: mutating the source
subject after indexing does not change the entry until the index is
explicitly updated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from .normalize import normalize_set


@dataclass(frozen=True)
class IndexEntry:
    """
    A subject as seen by the index.

    Attributes:
        subject_id: Stable subject identifier
        label: Human-readable label
        keywords: Keywords as supplied (display form)
        normalized_keywords: Normalized, non-empty keywords used for matching
        metadata: Read-only copy of the subject's string metadata
    """

    subject_id: str
    label: str
    keywords: tuple[str, ...] = ()
    normalized_keywords: frozenset[str] = frozenset()
    metadata: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_subject(cls, subject: Any) -> "IndexEntry":
        """
        Project a subject into an index entry.

        Works with anything exposing `id`, `label`, `description`, `keywords`
        and `metadata` attributes. Falls back to the description, then the
        id, when the subject has no label.
        """
        label = getattr(subject, "label", "") or getattr(subject, "description", "") or ""
        return create_index_entry(
            subject_id=subject.id,
            label=label or str(subject.id),
            keywords=getattr(subject, "keywords", None),
            metadata=getattr(subject, "metadata", None),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary."""
        return {
            "subject_id": self.subject_id,
            "label": self.label,
            "keywords": list(self.keywords),
            "normalized_keywords": sorted(self.normalized_keywords),
            "metadata": dict(self.metadata),
        }


def create_index_entry(
    subject_id: str,
    label: str,
    keywords: Optional[Iterable[str]] = None,
    metadata: Optional[Mapping[str, str]] = None,
) -> IndexEntry:
    """
    Build an IndexEntry, normalizing keywords and copying inputs.

    Keywords that normalize to the empty string are left out of the
    normalized set.
    """
    keyword_list = tuple(str(kw) for kw in (keywords or ()))
    return IndexEntry(
        subject_id=str(subject_id),
        label=label,
        keywords=keyword_list,
        normalized_keywords=frozenset(normalize_set(keyword_list)),
        metadata=MappingProxyType(dict(metadata or {})),
    )


@dataclass(frozen=True)
class SubjectMatch:
    """
    A ranked query result.

    Attributes:
        subject_id: Matched subject
        label: Subject label
        keywords: Subject keywords (display form)
        matching_keywords: Normalized query keywords that matched, exactly or
            as a substring/superstring
        score: Jaccard similarity between query and subject keyword sets
    """

    subject_id: str
    label: str
    keywords: tuple[str, ...]
    matching_keywords: tuple[str, ...]
    score: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "subject_id": self.subject_id,
            "label": self.label,
            "keywords": list(self.keywords),
            "matching_keywords": list(self.matching_keywords),
            "score": self.score,
        }


@dataclass(frozen=True)
class IndexStats:
    """Approximate size accounting for diagnostics. Not exact."""

    subject_count: int
    distinct_keyword_count: int
    avg_keywords_per_subject: float
    approximate_memory_bytes: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "subject_count": self.subject_count,
            "distinct_keyword_count": self.distinct_keyword_count,
            "avg_keywords_per_subject": self.avg_keywords_per_subject,
            "approximate_memory_bytes": self.approximate_memory_bytes,
        }


__all__ = ["IndexEntry", "SubjectMatch", "IndexStats", "create_index_entry"]
