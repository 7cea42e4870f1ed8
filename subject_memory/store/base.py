# subject_memory/store/base.py
"""
Subject store interface.

The store is the source of truth for subjects; the index is only a cache
of it. Implementations own the merge-or-create decision on create().

This is a documentation-only type hint. Don't check isinstance() against
it; just call the methods.
"""

from __future__ import annotations

from typing import Optional, Protocol

from .models import StoreResult, Subject, SubjectDraft


class SubjectStore(Protocol):
    """Authoritative subject persistence."""

    def list_ids(self) -> list[str]:
        """Ids of every stored subject."""
        ...

    def get(self, subject_id: str) -> Optional[Subject]:
        """A copy of the subject, or None if unknown."""
        ...

    def create(self, draft: SubjectDraft) -> StoreResult:
        """
        Create a subject, or merge into an existing one.

        An existing subject with the same id or the same normalized label
        absorbs the draft additively instead of being replaced.
        """
        ...

    def update(self, subject_id: str, draft: SubjectDraft) -> Optional[StoreResult]:
        """Apply the non-None draft fields. None if the subject is unknown."""
        ...

    def delete(self, subject_id: str) -> bool:
        """Delete a subject. False if it was unknown."""
        ...


__all__ = ["SubjectStore"]
