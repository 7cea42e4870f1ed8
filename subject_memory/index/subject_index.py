# subject_memory/index/subject_index.py
"""In-memory keyword-to-subject index with Jaccard ranking."""

from __future__ import annotations

import threading
from typing import Any, Iterable, Optional

from subject_memory.logging.logger import get_logger
from subject_memory.logging.tags import INDEX

from .models import IndexEntry, IndexStats, SubjectMatch
from .normalize import normalize_keywords
from .similarity import find_matching_keywords, jaccard_similarity

logger = get_logger(__name__)

# Rough per-item overheads for get_stats()
SUBJECT_OVERHEAD_BYTES = 500
KEYWORD_OVERHEAD_BYTES = 100


class SubjectIndex:
    """
    Keyword index over subjects.

    Keeps two maps:
    - subject id -> IndexEntry
    - normalized keyword -> set of subject ids (posting list)

    A posting list exists only while it is non-empty. Every public method
    holds the instance lock, so one index can be shared between threads.
    Instances share nothing; create one per tenant if needed.

    Usage:
        index = SubjectIndex()
        index.build_from_subjects(entries)

        index.update_subject(create_index_entry("s1", "rust", ["rust", "cli"]))
        matches = index.find_similar(["rust", "systems"], limit=5)
    """

    def __init__(self, min_partial_match_length: int = 0):
        """
        Args:
            min_partial_match_length: Shortest keyword allowed to count as a
                substring match in `matching_keywords` (0 keeps all)
        """
        self.min_partial_match_length = min_partial_match_length
        self._subjects: dict[str, IndexEntry] = {}
        self._postings: dict[str, set[str]] = {}
        self._lock = threading.RLock()

    # =========================================================================
    # Write Operations
    # =========================================================================

    def add_subject(self, entry: IndexEntry) -> None:
        """
        Insert an entry, replacing any entry with the same id.

        Re-adding an id detaches the previous entry's keywords first, so
        repeated adds leave the same state as a single add.
        """
        with self._lock:
            previous = self._subjects.get(entry.subject_id)
            if previous is not None:
                self._detach(entry.subject_id, previous.normalized_keywords)

            self._subjects[entry.subject_id] = entry
            self._attach(entry.subject_id, entry.normalized_keywords)

        logger.debug(
            f"{INDEX} Added subject {entry.subject_id} "
            f"({len(entry.normalized_keywords)} keywords)"
        )

    def update_subject(self, entry: IndexEntry) -> None:
        """
        Replace an entry, touching only the posting lists that changed.

        Falls back to add_subject() for unknown ids.
        """
        with self._lock:
            old = self._subjects.get(entry.subject_id)
            if old is None:
                self.add_subject(entry)
                return

            removed = old.normalized_keywords - entry.normalized_keywords
            added = entry.normalized_keywords - old.normalized_keywords

            self._detach(entry.subject_id, removed)
            self._attach(entry.subject_id, added)
            self._subjects[entry.subject_id] = entry

        logger.debug(
            f"{INDEX} Updated subject {entry.subject_id}: "
            f"+{len(added)} -{len(removed)} keywords"
        )

    def remove_subject(self, subject_id: str) -> bool:
        """
        Remove a subject from every posting list and drop its entry.

        Returns:
            False if the subject was not indexed, True otherwise
        """
        with self._lock:
            entry = self._subjects.pop(subject_id, None)
            if entry is None:
                return False
            self._detach(subject_id, entry.normalized_keywords)

        logger.debug(f"{INDEX} Removed subject {subject_id}")
        return True

    def clear(self) -> None:
        """Drop every entry and posting list."""
        with self._lock:
            self._subjects.clear()
            self._postings.clear()

    def build_from_subjects(self, entries: Iterable[IndexEntry]) -> None:
        """
        Rebuild the index from scratch.

        The lock is held for the whole rebuild, so readers see either the old
        index or the complete new one.
        """
        with self._lock:
            self.clear()
            for entry in entries:
                self.add_subject(entry)
            count = len(self._subjects)
            keywords = len(self._postings)

        logger.info(f"{INDEX} Built index: {count} subjects, {keywords} keywords")

    def _attach(self, subject_id: str, keywords: Iterable[str]) -> None:
        for keyword in keywords:
            self._postings.setdefault(keyword, set()).add(subject_id)

    def _detach(self, subject_id: str, keywords: Iterable[str]) -> None:
        for keyword in keywords:
            posting = self._postings.get(keyword)
            if posting is None:
                continue
            posting.discard(subject_id)
            if not posting:
                del self._postings[keyword]

    # =========================================================================
    # Read Operations
    # =========================================================================

    def find_by_keywords(self, keywords: Iterable[str]) -> list[SubjectMatch]:
        """
        Find subjects sharing at least one keyword with the query.

        Algorithm:
        1. Normalize the query keywords
        2. Union the posting lists of every query keyword (OR match)
        3. Score each candidate by Jaccard similarity on exact keywords
        4. Sort by score, highest first

        Order among equal scores is not significant.

        Args:
            keywords: Raw query keywords

        Returns:
            Matches ordered by descending score; empty when nothing matches
        """
        query = normalize_keywords(keywords)
        if not query:
            return []
        query_set = set(query)

        with self._lock:
            candidates: set[str] = set()
            for keyword in query:
                candidates.update(self._postings.get(keyword, ()))

            matches: list[SubjectMatch] = []
            for subject_id in candidates:
                entry = self._subjects.get(subject_id)
                if entry is None:
                    continue

                matching = find_matching_keywords(
                    query,
                    entry.normalized_keywords,
                    min_partial_length=self.min_partial_match_length,
                )
                if not matching:
                    continue

                matches.append(
                    SubjectMatch(
                        subject_id=entry.subject_id,
                        label=entry.label,
                        keywords=entry.keywords,
                        matching_keywords=tuple(matching),
                        score=jaccard_similarity(query_set, entry.normalized_keywords),
                    )
                )

        matches.sort(key=lambda m: m.score, reverse=True)
        return matches

    def find_similar(self, keywords: Iterable[str], limit: int = 10) -> list[SubjectMatch]:
        """Top `limit` results of find_by_keywords()."""
        if limit <= 0:
            return []
        return self.find_by_keywords(keywords)[:limit]

    def get_subject(self, subject_id: str) -> Optional[IndexEntry]:
        with self._lock:
            return self._subjects.get(subject_id)

    def has_subject(self, subject_id: str) -> bool:
        with self._lock:
            return subject_id in self._subjects

    def get_all_subjects(self) -> list[IndexEntry]:
        with self._lock:
            return list(self._subjects.values())

    def subjects_for_keyword(self, keyword: str) -> set[str]:
        """Copy of the posting list for one raw keyword (empty if unknown)."""
        query = normalize_keywords([keyword])
        if not query:
            return set()
        with self._lock:
            return set(self._postings.get(query[0], ()))

    def get_stats(self) -> IndexStats:
        """Approximate index statistics for diagnostics."""
        with self._lock:
            subject_count = len(self._subjects)
            keyword_count = len(self._postings)
            total_keywords = sum(len(e.normalized_keywords) for e in self._subjects.values())

        return IndexStats(
            subject_count=subject_count,
            distinct_keyword_count=keyword_count,
            avg_keywords_per_subject=(total_keywords / subject_count if subject_count else 0.0),
            approximate_memory_bytes=(
                subject_count * SUBJECT_OVERHEAD_BYTES + keyword_count * KEYWORD_OVERHEAD_BYTES
            ),
        )

    def export_state(self) -> dict[str, Any]:
        """Snapshot of entries and posting lists, for debugging."""
        with self._lock:
            return {
                "subjects": [entry.to_dict() for entry in self._subjects.values()],
                "keyword_index": {
                    keyword: sorted(ids) for keyword, ids in self._postings.items()
                },
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._subjects)

    def __contains__(self, subject_id: object) -> bool:
        with self._lock:
            return subject_id in self._subjects


__all__ = ["SubjectIndex"]
