# subject_memory/memory/coordinator.py
"""
Index maintenance.

Keeps a SubjectIndex in step with the subject store:
- Lazy build on first use (ensure_index)
- Incremental updates after store writes, only once the index is built
- Forced rebuild when marked stale

The store is the source of truth. Nothing here ever writes to it.
"""

from __future__ import annotations

import threading
from typing import Any

from subject_memory.index.models import IndexEntry
from subject_memory.index.subject_index import SubjectIndex
from subject_memory.logging.logger import get_logger
from subject_memory.logging.tags import INDEX
from subject_memory.store.base import SubjectStore

logger = get_logger(__name__)


class IndexCoordinator:
    """
    Builds and incrementally maintains a SubjectIndex from a SubjectStore.

    Usage:
        coordinator = IndexCoordinator(store, SubjectIndex())
        coordinator.ensure_index()  # builds once
        coordinator.subject_written("subject-rust")  # after a store write
    """

    def __init__(self, store: SubjectStore, index: SubjectIndex):
        self.store = store
        self.index = index
        self._built = False
        self._building = False
        # Ids written while a build is reading the store; replayed after it.
        self._pending: set[str] = set()
        self._build_lock = threading.RLock()

    @property
    def is_built(self) -> bool:
        return self._built

    def build_index(self) -> None:
        """
        Rebuild the index from every subject in the store.

        Subjects that disappear between listing and reading are skipped.
        Writes notified while the build runs are re-read from the store and
        applied before the index is marked built. Store errors propagate and
        leave the index unbuilt.
        """
        with self._build_lock:
            self._built = False
            self._building = True
            self._pending.clear()
            try:
                try:
                    entries = self._load_entries()
                except Exception as e:
                    logger.error(f"{INDEX} Index build failed: {e}")
                    raise

                self.index.build_from_subjects(entries)

                pending = sorted(self._pending)
                self._pending.clear()
                for subject_id in pending:
                    self._reproject(subject_id)
                if pending:
                    logger.debug(f"{INDEX} Replayed {len(pending)} writes made during build")

                self._built = True
            finally:
                self._building = False
                self._pending.clear()

    def ensure_index(self) -> None:
        """Build the index if it is not built yet."""
        if self._built:
            return
        with self._build_lock:
            if not self._built:
                self.build_index()

    def subject_written(self, subject_id: str) -> None:
        """
        Reflect a successful create or update of one subject.

        Waits for a build running in another thread. A write made during a
        build is queued and replayed once the build has loaded the store.
        No-op while the index is unbuilt; the lazy build picks the change up.
        """
        with self._build_lock:
            if self._building:
                self._pending.add(subject_id)
                return
            if not self._built:
                return
            self._reproject(subject_id)

    def subject_deleted(self, subject_id: str) -> None:
        """Reflect a successful delete of one subject."""
        with self._build_lock:
            if self._building:
                self._pending.add(subject_id)
                return
            if not self._built:
                return
            self.index.remove_subject(subject_id)

    def mark_stale(self) -> None:
        """Force the next ensure_index() to rebuild."""
        self._built = False
        logger.warning(f"{INDEX} Index marked stale, next query rebuilds it")

    def stats(self) -> dict[str, Any]:
        """
        Index diagnostics.

        Returns:
            {"initialized": bool, "stats": dict or None}
        """
        if not self._built:
            return {"initialized": False, "stats": None}
        return {"initialized": True, "stats": self.index.get_stats().to_dict()}

    def _reproject(self, subject_id: str) -> None:
        """Copy the store's current view of one subject into the index."""
        subject = self.store.get(subject_id)
        if subject is None:
            self.index.remove_subject(subject_id)
            return
        self.index.update_subject(IndexEntry.from_subject(subject))

    def _load_entries(self) -> list[IndexEntry]:
        entries: list[IndexEntry] = []
        for subject_id in self.store.list_ids():
            subject = self.store.get(subject_id)
            if subject is None:
                continue
            entries.append(IndexEntry.from_subject(subject))
        return entries


__all__ = ["IndexCoordinator"]
