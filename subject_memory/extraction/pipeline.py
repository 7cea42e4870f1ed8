# subject_memory/extraction/pipeline.py
"""
Subject extraction pipeline.

The pipeline:
1. Asks the keyword extractor for up to N keywords per record
2. Normalizes them and keeps a running frequency count over the batch
3. Builds one candidate per record from its most frequent keywords so far
4. Drops candidates below the confidence threshold
5. Deduplicates candidates by label

A record whose extraction fails is logged and skipped; the batch carries on.
Persisting the surviving candidates is the caller's job.
"""

from __future__ import annotations

import time
from collections import Counter
from typing import Iterable, Optional, Sequence

from subject_memory.config.schema import ExtractionConfig
from subject_memory.core.exceptions import ExtractionError, ExtractorUnavailableError
from subject_memory.index.normalize import normalize_keywords
from subject_memory.logging.logger import get_logger
from subject_memory.logging.tags import EXTRACTION

from .dedupe import deduplicate_subjects
from .models import ExtractedSubject, PipelineOutput, RecordFailure, TextRecord
from .protocols import KeywordExtractor

logger = get_logger(__name__)


def excerpt(text: str, max_chars: int) -> str:
    """Cut text to `max_chars`, marking the cut with '...'."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "..."


def select_records(
    records: Iterable[TextRecord],
    record_ids: Optional[Iterable[str]] = None,
    limit: Optional[int] = None,
) -> list[TextRecord]:
    """
    Pick the records a batch should process.

    Keeps records with text, optionally only the given ids, newest first
    (records without a timestamp last), then applies `limit` if positive.
    """
    selected = [r for r in records if r.text and r.text.strip()]

    if record_ids:
        wanted = set(record_ids)
        selected = [r for r in selected if r.id in wanted]

    selected.sort(
        key=lambda r: r.timestamp.timestamp() if r.timestamp else float("-inf"),
        reverse=True,
    )

    if limit and limit > 0:
        selected = selected[:limit]

    return selected


class SubjectExtractionPipeline:
    """
    Turns a batch of text records into deduplicated candidate subjects.

    Usage:
        pipeline = SubjectExtractionPipeline(
            extractor=FrequencyKeywordExtractor(),
            config=ExtractionConfig(min_confidence=0.3),
        )
        output = pipeline.run(records)
        for subject in output.subjects:
            print(subject.label, subject.confidence)
    """

    def __init__(
        self,
        extractor: Optional[KeywordExtractor],
        config: Optional[ExtractionConfig] = None,
    ):
        self._extractor = extractor
        self.config = config or ExtractionConfig()

    def run(
        self,
        records: Sequence[TextRecord],
        min_confidence: Optional[float] = None,
    ) -> PipelineOutput:
        """
        Extract candidate subjects from a batch.

        Args:
            records: Records to process, already selected and ordered
            min_confidence: Overrides the configured threshold

        Returns:
            PipelineOutput with candidates, deduplicated subjects and failures

        Raises:
            ExtractorUnavailableError: If no extractor was configured
        """
        if self._extractor is None:
            raise ExtractorUnavailableError("Keyword extractor not available")

        threshold = self.config.min_confidence if min_confidence is None else min_confidence
        start = time.perf_counter()

        total = len(records)
        frequencies: Counter[str] = Counter()
        candidates: list[ExtractedSubject] = []
        failures: list[RecordFailure] = []

        for record in records:
            try:
                keywords = self._extract(record)
            except Exception as e:
                logger.warning(f"{EXTRACTION} Keyword extraction failed for {record.id}: {e}")
                failures.append(RecordFailure(record_id=record.id, error=str(e)))
                continue

            frequencies.update(keywords)
            candidate = self._candidate(record, keywords, frequencies, total)

            if candidate.confidence >= threshold:
                candidates.append(candidate)
            else:
                logger.debug(
                    f"{EXTRACTION} Dropped '{candidate.label}' "
                    f"(confidence {candidate.confidence:.2f} < {threshold:.2f})"
                )

        subjects = deduplicate_subjects(candidates)
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.info(
            f"{EXTRACTION} Processed {total} records: {len(subjects)} subjects, "
            f"{len(failures)} failures in {elapsed_ms:.1f}ms"
        )

        return PipelineOutput(
            candidates=candidates,
            subjects=subjects,
            total_records=total,
            failures=failures,
            elapsed_ms=elapsed_ms,
        )

    def _extract(self, record: TextRecord) -> list[str]:
        """Normalized, deduplicated keywords of one record, capped at the configured count."""
        limit = self.config.max_keywords_per_record
        raw = self._extractor.extract_keywords(record.text, limit)
        keywords = normalize_keywords(raw or [])[:limit]
        if not keywords:
            raise ExtractionError("no keywords extracted", record_id=record.id)
        return keywords

    def _candidate(
        self,
        record: TextRecord,
        keywords: list[str],
        frequencies: Counter[str],
        total: int,
    ) -> ExtractedSubject:
        """
        Build the candidate for one record.

        The label keywords are the record's keywords with the highest running
        frequency, extractor order breaking ties. Confidence is their mean
        frequency over the batch size, capped at 1.0.
        """
        ranked = sorted(
            range(len(keywords)),
            key=lambda i: (-frequencies[keywords[i]], i),
        )
        top = [keywords[i] for i in ranked[: self.config.label_keywords]]

        avg_frequency = sum(frequencies[kw] for kw in top) / len(top)
        confidence = min(avg_frequency / total, 1.0)

        return ExtractedSubject(
            label=" ".join(top),
            keywords=top,
            confidence=confidence,
            description=excerpt(record.text, self.config.description_chars),
            record_excerpt=excerpt(record.text, self.config.excerpt_chars),
            record_id=record.id,
        )


__all__ = ["SubjectExtractionPipeline", "select_records", "excerpt"]
