# subject_memory/index/similarity.py
"""Scoring helpers for the subject index."""

from __future__ import annotations

from typing import AbstractSet, Iterable


def jaccard_similarity(a: AbstractSet[str], b: AbstractSet[str]) -> float:
    """
    Jaccard coefficient J(A, B) = |A ∩ B| / |A ∪ B|.

    Returns 0.0 when both sets are empty.

    Examples:
        >>> round(jaccard_similarity({"a", "b"}, {"a", "b", "c"}), 3)
        0.667
    """
    union = len(a | b)
    if union == 0:
        return 0.0
    return len(a & b) / union


def find_matching_keywords(
    query: Iterable[str],
    candidate: AbstractSet[str],
    min_partial_length: int = 0,
) -> list[str]:
    """
    Query keywords that match a candidate's keywords.

    A query keyword matches when the candidate holds it exactly. Otherwise it
    still matches if it is a substring or superstring of some candidate
    keyword ("project" vs "projects"). Partial matches only feed the
    displayed match list, never the score.

    Args:
        query: Normalized query keywords, in query order
        candidate: Normalized keywords of the candidate subject
        min_partial_length: Both sides of a substring match must be at least
            this long (0 disables the guard)
    """
    matches: list[str] = []

    for keyword in query:
        if keyword in candidate:
            matches.append(keyword)
            continue

        if len(keyword) < min_partial_length:
            continue

        for other in candidate:
            if len(other) < min_partial_length:
                continue
            if keyword in other or other in keyword:
                matches.append(keyword)
                break

    return matches


__all__ = ["jaccard_similarity", "find_matching_keywords"]
