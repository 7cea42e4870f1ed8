# subject_memory/memory/service.py
"""
SubjectMemory - the owning service.

Ties together the subject store, the extraction pipeline and the similarity
index:

    records -> SubjectExtractionPipeline -> store.create() -> IndexCoordinator
                                                                   |
    search(keywords) <------------------------------------ SubjectIndex

The store is authoritative. Every write goes to the store first; the index
is told afterwards. If updating the index fails, the write stands and the
index is marked stale so the next query rebuilds it.

Usage:
    from subject_memory import InMemorySubjectStore, SubjectMemory, TextRecord
    from subject_memory.extraction import FrequencyKeywordExtractor

    memory = SubjectMemory(InMemorySubjectStore(), FrequencyKeywordExtractor())
    memory.enable_scope("chat-1")
    memory.extract_and_store("chat-1", [TextRecord(id="m1", text="...")])

    for match in memory.search(["rust", "cli"]):
        print(match.label, match.score)
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence, Union

from subject_memory.config.loader import load_config
from subject_memory.config.schema import SubjectMemoryConfig
from subject_memory.core.exceptions import ExtractorUnavailableError, ScopeNotEnabledError
from subject_memory.extraction.models import ExtractedSubject, ExtractionResult, TextRecord
from subject_memory.extraction.pipeline import SubjectExtractionPipeline, select_records
from subject_memory.extraction.protocols import KeywordExtractor
from subject_memory.index.models import IndexEntry, SubjectMatch
from subject_memory.index.normalize import normalize_keywords
from subject_memory.index.subject_index import SubjectIndex
from subject_memory.logging.logger import configure_logging, get_logger
from subject_memory.logging.tags import MEMORY
from subject_memory.store.base import SubjectStore
from subject_memory.store.models import (
    StoreResult,
    Subject,
    SubjectDraft,
    SubjectSource,
    utc_now,
)

from .associations import AssociationRegistry, SubjectAssociation
from .coordinator import IndexCoordinator
from .scopes import ScopeRegistry, ScopeSettings

logger = get_logger(__name__)


@dataclass
class MemoryContext:
    """Subjects related to a piece of free text."""

    keywords: list[str] = field(default_factory=list)
    matches: list[SubjectMatch] = field(default_factory=list)

    @property
    def has_matches(self) -> bool:
        return bool(self.matches)

    def to_dict(self) -> dict[str, Any]:
        return {
            "keywords": list(self.keywords),
            "matches": [match.to_dict() for match in self.matches],
        }


class SubjectMemory:
    """
    Subject extraction, storage and similarity search behind one API.

    Each instance owns its index, scope settings and associations. Create
    one instance per tenant to keep tenants apart.
    """

    def __init__(
        self,
        store: SubjectStore,
        extractor: Optional[KeywordExtractor] = None,
        config: Optional[SubjectMemoryConfig] = None,
        index: Optional[SubjectIndex] = None,
    ):
        """
        Args:
            store: Authoritative subject store
            extractor: Keyword extractor; extraction features need one
            config: Settings (package defaults if None)
            index: Index to maintain (a new one if None)
        """
        self.store = store
        self.extractor = extractor
        self.config = config or SubjectMemoryConfig()
        if index is None:
            index = SubjectIndex(
                min_partial_match_length=self.config.index.min_partial_match_length
            )
        self.index = index
        self.coordinator = IndexCoordinator(store, self.index)
        self.scopes = ScopeRegistry()
        self._associations = AssociationRegistry()
        self._pipeline = SubjectExtractionPipeline(extractor, self.config.extraction)

    @classmethod
    def from_config_file(
        cls,
        store: SubjectStore,
        extractor: Optional[KeywordExtractor] = None,
        path: Optional[Union[str, Path]] = None,
    ) -> "SubjectMemory":
        """Load config from YAML (defaults if no path), configure logging, build the service."""
        config = load_config(path)
        configure_logging(config.logging.level)
        return cls(store, extractor=extractor, config=config)

    # =========================================================================
    # Query API
    # =========================================================================

    def search(self, keywords: Iterable[str], limit: Optional[int] = None) -> list[SubjectMatch]:
        """
        Subjects related to the keywords, best match first.

        Args:
            keywords: Raw query keywords
            limit: Maximum results (config default if None)
        """
        if limit is None:
            limit = self.config.index.default_limit
        self.coordinator.ensure_index()
        return self.index.find_similar(keywords, limit)

    def similar_subjects(self, subject_id: str, limit: Optional[int] = None) -> list[SubjectMatch]:
        """
        Subjects related to a known subject, excluding the subject itself.

        Returns an empty list for unknown subjects.
        """
        if limit is None:
            limit = self.config.index.default_limit
        if limit <= 0:
            return []

        self.coordinator.ensure_index()
        entry = self.index.get_subject(subject_id)
        if entry is None:
            subject = self.store.get(subject_id)
            if subject is None:
                return []
            entry = IndexEntry.from_subject(subject)

        matches = self.search(entry.keywords, limit + 1)
        return [m for m in matches if m.subject_id != subject_id][:limit]

    def get_subject(self, subject_id: str) -> Optional[Subject]:
        return self.store.get(subject_id)

    # =========================================================================
    # Maintenance API
    # =========================================================================

    def rebuild_index(self) -> None:
        """Rebuild the index from the store."""
        self.coordinator.build_index()

    def index_stats(self) -> dict[str, Any]:
        """{"initialized": bool, "stats": dict or None}"""
        return self.coordinator.stats()

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create_subject(self, draft: SubjectDraft) -> StoreResult:
        """Create a subject (or merge into an existing one) and index it."""
        result = self.store.create(draft)
        self._reflect_write(result.subject_id)
        return result

    def update_subject(self, subject_id: str, draft: SubjectDraft) -> Optional[StoreResult]:
        """Update a subject. None if the store does not know it."""
        result = self.store.update(subject_id, draft)
        if result is None:
            return None
        self._reflect_write(subject_id)
        return result

    def delete_subject(self, subject_id: str) -> bool:
        """Delete a subject and its associations. False if unknown."""
        if not self.store.delete(subject_id):
            return False

        self._associations.forget_subject(subject_id)
        try:
            self.coordinator.subject_deleted(subject_id)
        except Exception as e:
            logger.warning(f"{MEMORY} Index update failed after deleting {subject_id}: {e}")
            self.coordinator.mark_stale()
        return True

    def update_memory(
        self,
        subject_id: str,
        scope_id: str,
        keywords: Iterable[str],
        additional_description: Optional[str] = None,
    ) -> Optional[Subject]:
        """
        Enrich a subject with what a scope said about it.

        Merges the keywords, appends the description as a new paragraph and
        stamps `last_updated_from` / `last_updated_at` metadata.

        Returns:
            The updated subject, or None if it is unknown
        """
        subject = self.store.get(subject_id)
        if subject is None:
            return None

        new_keywords = list(keywords)
        subject.add_keywords(new_keywords)

        description = subject.description
        if additional_description:
            if description:
                description = f"{description}\n\n{additional_description}"
            else:
                description = additional_description

        metadata = dict(subject.metadata)
        metadata["last_updated_from"] = scope_id
        metadata["last_updated_at"] = utc_now().isoformat()

        result = self.update_subject(
            subject_id,
            SubjectDraft(
                description=description,
                keywords=subject.keywords,
                metadata=metadata,
                sources=[SubjectSource(kind="scope", source_id=scope_id)],
            ),
        )
        if result is None:
            return None

        self._associations.record(scope_id, subject_id, new_keywords)
        return self.store.get(subject_id)

    def _reflect_write(self, subject_id: str) -> None:
        try:
            self.coordinator.subject_written(subject_id)
        except Exception as e:
            logger.warning(f"{MEMORY} Index update failed after writing {subject_id}: {e}")
            self.coordinator.mark_stale()

    # =========================================================================
    # Scopes
    # =========================================================================

    def enable_scope(self, scope_id: str, **overrides: Any) -> ScopeSettings:
        """Enable extraction for a scope. Overrides replace ScopeSettings fields."""
        settings = self.scopes.enable(scope_id, **overrides)
        logger.info(f"{MEMORY} Enabled subject extraction for scope {scope_id}")
        return settings

    def disable_scope(self, scope_id: str) -> bool:
        disabled = self.scopes.disable(scope_id)
        if disabled:
            logger.info(f"{MEMORY} Disabled subject extraction for scope {scope_id}")
        return disabled

    def is_scope_enabled(self, scope_id: str) -> bool:
        return self.scopes.is_enabled(scope_id)

    def scope_settings(self, scope_id: str) -> Optional[ScopeSettings]:
        return self.scopes.get(scope_id)

    # =========================================================================
    # Extraction
    # =========================================================================

    def extract_and_store(
        self,
        scope_id: str,
        records: Sequence[TextRecord],
        record_ids: Optional[Iterable[str]] = None,
        limit: Optional[int] = None,
    ) -> ExtractionResult:
        """
        Extract subjects from a scope's records and persist them.

        Args:
            scope_id: Scope the records belong to
            records: Candidate records
            record_ids: Only process these records
            limit: Only process the newest `limit` records

        Returns:
            ExtractionResult with the deduplicated subjects and the stored ids

        Raises:
            ScopeNotEnabledError: If extraction is not enabled for the scope
            ExtractorUnavailableError: If no keyword extractor is configured
        """
        settings = self.scopes.get(scope_id)
        if settings is None or not settings.enabled:
            raise ScopeNotEnabledError(scope_id)
        if self.extractor is None:
            raise ExtractorUnavailableError("Keyword extractor not available")

        start = time.perf_counter()
        selected = select_records(records, record_ids=record_ids, limit=limit)
        output = self._pipeline.run(selected, min_confidence=settings.min_confidence)

        stored_ids: list[str] = []
        for subject in output.subjects:
            try:
                subject_id = self._persist(scope_id, subject, settings)
            except Exception as e:
                logger.warning(f"{MEMORY} Failed to store subject '{subject.label}': {e}")
                continue
            if subject_id not in stored_ids:
                stored_ids.append(subject_id)

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{MEMORY} Scope {scope_id}: stored {len(stored_ids)}/{len(output.subjects)} "
            f"subjects from {output.total_records} records"
        )

        return ExtractionResult(
            subjects=output.subjects,
            stored_ids=stored_ids,
            total_records=output.total_records,
            failures=output.failures,
            processing_time_ms=elapsed_ms,
        )

    def _persist(self, scope_id: str, subject: ExtractedSubject, settings: ScopeSettings) -> str:
        extracted_at = utc_now()
        keywords = normalize_keywords([*subject.keywords, *settings.keywords])

        result = self.create_subject(
            SubjectDraft(
                label=subject.label,
                description=subject.description,
                keywords=keywords,
                metadata={
                    "keywords": ", ".join(subject.keywords),
                    "confidence": f"{subject.confidence:.3f}",
                    "extracted_from": scope_id,
                    "extracted_at": extracted_at.isoformat(),
                    "excerpt": subject.record_excerpt,
                },
                sources=[
                    SubjectSource(
                        kind="scope",
                        source_id=scope_id,
                        extracted_at=extracted_at,
                        confidence=subject.confidence,
                    )
                ],
            )
        )
        self._associations.record(
            scope_id, result.subject_id, subject.keywords, confidence=subject.confidence
        )
        return result.subject_id

    def context_for_text(self, text: str, limit: Optional[int] = None) -> MemoryContext:
        """
        Known subjects related to free text.

        Raises:
            ExtractorUnavailableError: If no keyword extractor is configured
        """
        if self.extractor is None:
            raise ExtractorUnavailableError("Keyword extractor not available")
        if limit is None:
            limit = self.config.index.context_limit

        raw = self.extractor.extract_keywords(text, self.config.extraction.max_keywords_per_record)
        keywords = normalize_keywords(raw or [])
        if not keywords:
            return MemoryContext()

        return MemoryContext(keywords=keywords, matches=self.search(keywords, limit))

    # =========================================================================
    # Associations
    # =========================================================================

    def associations(self, scope_id: str) -> list[SubjectAssociation]:
        """Subjects linked to a scope."""
        return self._associations.for_scope(scope_id)

    def subjects_for_source(self, source_id: str) -> list[Subject]:
        """Every stored subject with a source of this id."""
        subjects = []
        for subject_id in self.store.list_ids():
            subject = self.store.get(subject_id)
            if subject is not None and any(s.source_id == source_id for s in subject.sources):
                subjects.append(subject)
        return subjects

    def sources_for_subject(self, subject_id: str) -> list[SubjectSource]:
        """Sources of a subject; empty if unknown."""
        subject = self.store.get(subject_id)
        return list(subject.sources) if subject is not None else []


__all__ = ["SubjectMemory", "MemoryContext"]
