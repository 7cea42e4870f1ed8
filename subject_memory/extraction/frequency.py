# subject_memory/extraction/frequency.py
"""Term-frequency keyword extractor."""

from __future__ import annotations

import re
from collections import Counter
from typing import Iterable, Optional

# Basic English stop words; extendable through the constructor.
STOPWORDS = frozenset(
    {
        "a", "about", "after", "all", "also", "an", "and", "any", "are", "as",
        "at", "be", "because", "been", "but", "by", "can", "could", "did", "do",
        "does", "for", "from", "had", "has", "have", "he", "her", "here", "him",
        "his", "how", "i", "if", "in", "into", "is", "it", "its", "just", "me",
        "my", "no", "not", "of", "on", "or", "our", "out", "she", "so", "some",
        "than", "that", "the", "their", "them", "then", "there", "these", "they",
        "this", "those", "to", "too", "up", "us", "was", "we", "were", "what",
        "when", "where", "which", "while", "who", "why", "will", "with", "would",
        "you", "your",
    }
)  # fmt: skip

_WORD_RE = re.compile(r"[^\W\d_][\w'-]*")


class FrequencyKeywordExtractor:
    """
    Extracts the most frequent non-stop-word terms of a text.

    Ties are broken by first appearance. Satisfies the KeywordExtractor
    protocol, so hosts without an LLM-backed extractor can still run the
    extraction pipeline.

    Usage:
        extractor = FrequencyKeywordExtractor(min_length=3)
        extractor.extract_keywords("Rust makes rust tooling fast", 2)
        # ['rust', 'makes']
    """

    def __init__(self, min_length: int = 3, stopwords: Optional[Iterable[str]] = None):
        self.min_length = min_length
        self.stopwords = frozenset(STOPWORDS | set(stopwords or ()))

    def extract_keywords(self, text: str, max_count: int) -> list[str]:
        terms = [
            word.strip("'-")
            for word in (match.group(0).lower() for match in _WORD_RE.finditer(text))
        ]
        terms = [t for t in terms if len(t) >= self.min_length and t not in self.stopwords]

        counts = Counter(terms)
        first_seen = {term: i for i, term in reversed(list(enumerate(terms)))}
        ranked = sorted(counts, key=lambda t: (-counts[t], first_seen[t]))
        return ranked[:max_count]


__all__ = ["FrequencyKeywordExtractor", "STOPWORDS"]
