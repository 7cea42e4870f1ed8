# subject_memory/memory/associations.py
"""
Scope to subject associations.

Records which subjects an extraction run found in which scope, with the
keywords and confidence of the latest sighting.
"""

from __future__ import annotations

import copy
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Optional

from subject_memory.store.models import utc_now


@dataclass
class SubjectAssociation:
    """
    A link between a scope and a subject.

    Attributes:
        scope_id: Scope the subject was found in
        subject_id: Linked subject
        keywords: Keywords seen for the subject in this scope
        confidence: Confidence of the latest sighting
        record_count: How many times the link was recorded
        created_at: First sighting
        updated_at: Latest sighting
    """

    scope_id: str
    subject_id: str
    keywords: list[str] = field(default_factory=list)
    confidence: float = 0.0
    record_count: int = 1
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "scope_id": self.scope_id,
            "subject_id": self.subject_id,
            "keywords": list(self.keywords),
            "confidence": self.confidence,
            "record_count": self.record_count,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


class AssociationRegistry:
    """Thread-safe store of SubjectAssociation, keyed by (scope_id, subject_id)."""

    def __init__(self) -> None:
        self._links: dict[tuple[str, str], SubjectAssociation] = {}
        self._lock = threading.Lock()

    def record(
        self,
        scope_id: str,
        subject_id: str,
        keywords: Iterable[str] = (),
        confidence: Optional[float] = None,
    ) -> SubjectAssociation:
        """
        Create or refresh a link.

        Refreshing merges keywords, bumps `record_count` and replaces the
        confidence when one is given.
        """
        key = (scope_id, subject_id)
        with self._lock:
            link = self._links.get(key)
            if link is None:
                link = SubjectAssociation(
                    scope_id=scope_id,
                    subject_id=subject_id,
                    confidence=confidence or 0.0,
                )
                self._links[key] = link
            else:
                link.record_count += 1
                link.updated_at = utc_now()
                if confidence is not None:
                    link.confidence = confidence

            for keyword in keywords:
                if keyword not in link.keywords:
                    link.keywords.append(keyword)

            return copy.deepcopy(link)

    def for_scope(self, scope_id: str) -> list[SubjectAssociation]:
        with self._lock:
            return [copy.deepcopy(link) for (s, _), link in self._links.items() if s == scope_id]

    def for_subject(self, subject_id: str) -> list[SubjectAssociation]:
        with self._lock:
            return [copy.deepcopy(link) for (_, s), link in self._links.items() if s == subject_id]

    def forget_subject(self, subject_id: str) -> int:
        """Drop every link to a subject. Returns how many were dropped."""
        with self._lock:
            keys = [key for key in self._links if key[1] == subject_id]
            for key in keys:
                del self._links[key]
            return len(keys)


__all__ = ["SubjectAssociation", "AssociationRegistry"]
