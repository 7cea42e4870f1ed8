# subject_memory/extraction/dedupe.py
"""
Candidate deduplication.

Candidates are keyed on their case-insensitive label; the higher
confidence wins, ties keep the earlier candidate.
"""

from __future__ import annotations

from subject_memory.logging.logger import get_logger
from subject_memory.logging.tags import EXTRACTION

from .models import ExtractedSubject

logger = get_logger(__name__)


def deduplicate_subjects(candidates: list[ExtractedSubject]) -> list[ExtractedSubject]:
    """
    Keep one candidate per label.

    Output follows the order in which each label was first seen.
    """
    if not candidates:
        return []

    seen: dict[str, ExtractedSubject] = {}
    for candidate in candidates:
        key = candidate.label.lower()
        existing = seen.get(key)
        if existing is None or candidate.confidence > existing.confidence:
            seen[key] = candidate

    unique = list(seen.values())
    logger.debug(f"{EXTRACTION} Dedupe: input={len(candidates)} output={len(unique)}")
    return unique


__all__ = ["deduplicate_subjects"]
