# subject_memory/extraction/protocols.py
"""
Protocol definitions for extraction collaborators.

These are documentation-only type hints. DO NOT check isinstance() against
them. Just call the methods and let duck typing work.
"""

from __future__ import annotations

from typing import Protocol


class KeywordExtractor(Protocol):
    """Keyword extraction interface. Don't check isinstance - just call it."""

    def extract_keywords(self, text: str, max_count: int) -> list[str]:
        """
        Extract up to `max_count` keywords from text, most relevant first.

        May raise on failure; callers treat that as a per-record error.
        Output does not need to be normalized.
        """
        ...


__all__ = ["KeywordExtractor"]
