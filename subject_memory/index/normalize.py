# subject_memory/index/normalize.py
"""
Keyword normalization for consistent matching.

Canonical form:
- lowercase
- apostrophes dropped ("don't" -> "dont")
- any other character that is not a letter, digit or whitespace becomes a
  space ("Project-Lama!!" -> "project lama")
- whitespace runs collapsed, ends trimmed

normalize() is total and idempotent. It can return "" (e.g. for "!!!"),
so callers filter empties before indexing; normalize_set() and
normalize_keywords() already do.
"""

from __future__ import annotations

import re
from typing import Iterable

_APOSTROPHES_RE = re.compile(r"['’‘`]")
_NON_WORD_RE = re.compile(r"[^\w\s]|_")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize(raw: object) -> str:
    """
    Canonicalize a raw keyword.

    Examples:
        >>> normalize("Project-Lama!!")
        'project lama'
        >>> normalize("  Rust  ")
        'rust'
        >>> normalize("")
        ''
    """
    text = str(raw).lower()
    text = _APOSTROPHES_RE.sub("", text)
    text = _NON_WORD_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_keywords(raw: Iterable[object]) -> list[str]:
    """Normalize keywords, dropping empties and duplicates but keeping order."""
    seen: set[str] = set()
    result: list[str] = []
    for item in raw:
        keyword = normalize(item)
        if keyword and keyword not in seen:
            seen.add(keyword)
            result.append(keyword)
    return result


def normalize_set(raw: Iterable[object]) -> set[str]:
    """Normalize keywords into a set, dropping empties."""
    return {keyword for keyword in (normalize(item) for item in raw) if keyword}


__all__ = ["normalize", "normalize_keywords", "normalize_set"]
