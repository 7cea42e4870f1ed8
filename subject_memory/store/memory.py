# subject_memory/store/memory.py
"""
In-memory subject store.

Reference SubjectStore implementation for tests, demos and hosts that keep
subjects in process. Returns deep copies, so callers can never mutate the
stored state by accident.
"""

from __future__ import annotations

import copy
import re
import threading
import uuid
from typing import Iterable, Optional

from subject_memory.core.exceptions import StoreError
from subject_memory.index.normalize import normalize
from subject_memory.logging.logger import get_logger
from subject_memory.logging.tags import STORAGE

from .models import StoreResult, Subject, SubjectDraft, utc_now

logger = get_logger(__name__)

_SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
_SLUG_SEPARATOR_RE = re.compile(r"[\s_-]+")


def subject_id_for_label(label: str) -> str:
    """
    Derive a stable subject id from a label.

    Examples:
        >>> subject_id_for_label("Rust Systems!")
        'subject-rust-systems'
    """
    slug = _SLUG_STRIP_RE.sub("", label.lower())
    slug = _SLUG_SEPARATOR_RE.sub("-", slug).strip("-")
    if not slug:
        slug = uuid.uuid4().hex[:12]
    return f"subject-{slug}"


class InMemorySubjectStore:
    """
    Thread-safe dict-backed subject store.

    Usage:
        store = InMemorySubjectStore()
        result = store.create(SubjectDraft(label="rust cli", keywords=["rust", "cli"]))
        subject = store.get(result.subject_id)
    """

    def __init__(self, subjects: Optional[Iterable[Subject]] = None):
        self._subjects: dict[str, Subject] = {}
        self._lock = threading.Lock()
        for subject in subjects or ():
            self._subjects[subject.id] = copy.deepcopy(subject)

    def list_ids(self) -> list[str]:
        with self._lock:
            return list(self._subjects)

    def get(self, subject_id: str) -> Optional[Subject]:
        with self._lock:
            subject = self._subjects.get(subject_id)
            return copy.deepcopy(subject) if subject is not None else None

    def create(self, draft: SubjectDraft) -> StoreResult:
        if not draft.label or not draft.label.strip():
            raise StoreError("A subject needs a non-empty label")

        subject_id = draft.subject_id or subject_id_for_label(draft.label)

        with self._lock:
            existing = self._subjects.get(subject_id) or self._find_by_label(draft.label)
            if existing is not None:
                self._merge(existing, draft)
                logger.debug(f"{STORAGE} Merged draft into existing subject {existing.id}")
                return StoreResult(subject_id=existing.id, created=False)

            subject = Subject(
                id=subject_id,
                label=draft.label,
                description=draft.description or "",
                metadata=dict(draft.metadata or {}),
            )
            subject.add_keywords(list(draft.keywords or []))
            for source in draft.sources or []:
                subject.add_source(copy.deepcopy(source))
            self._subjects[subject_id] = subject

        logger.debug(f"{STORAGE} Created subject {subject_id}")
        return StoreResult(subject_id=subject_id, created=True)

    def update(self, subject_id: str, draft: SubjectDraft) -> Optional[StoreResult]:
        with self._lock:
            subject = self._subjects.get(subject_id)
            if subject is None:
                return None

            if draft.label is not None:
                subject.label = draft.label
            if draft.description is not None:
                subject.description = draft.description
            if draft.keywords is not None:
                subject.keywords = []
                subject.add_keywords(list(draft.keywords))
            if draft.metadata is not None:
                subject.metadata = dict(draft.metadata)
            for source in draft.sources or []:
                subject.add_source(copy.deepcopy(source))
            subject.updated_at = utc_now()

        logger.debug(f"{STORAGE} Updated subject {subject_id}")
        return StoreResult(subject_id=subject_id, created=False)

    def delete(self, subject_id: str) -> bool:
        with self._lock:
            removed = self._subjects.pop(subject_id, None) is not None

        if removed:
            logger.debug(f"{STORAGE} Deleted subject {subject_id}")
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._subjects)

    def _find_by_label(self, label: str) -> Optional[Subject]:
        key = normalize(label)
        if not key:
            return None
        for subject in self._subjects.values():
            if normalize(subject.label) == key:
                return subject
        return None

    @staticmethod
    def _merge(subject: Subject, draft: SubjectDraft) -> None:
        """Additive merge: keyword and source union, longest description wins."""
        subject.add_keywords(list(draft.keywords or []))
        for source in draft.sources or []:
            subject.add_source(copy.deepcopy(source))
        if draft.description and len(draft.description) > len(subject.description):
            subject.description = draft.description
        if draft.metadata:
            subject.metadata.update(draft.metadata)
        subject.updated_at = utc_now()


__all__ = ["InMemorySubjectStore", "subject_id_for_label"]
