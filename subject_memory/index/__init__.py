# subject_memory/index/__init__.py
"""
Keyword similarity index.

This module provides:
- Keyword normalization (normalize, normalize_set)
- The in-memory SubjectIndex (posting lists + Jaccard ranking)
- Index value types (IndexEntry, SubjectMatch, IndexStats)

Usage:
    from subject_memory.index import SubjectIndex, create_index_entry

    index = SubjectIndex()
    index.add_subject(create_index_entry("s1", "rust systems", ["rust", "systems"]))
    matches = index.find_similar(["rust", "cli"], limit=5)
"""

from .models import IndexEntry, IndexStats, SubjectMatch, create_index_entry
from .normalize import normalize, normalize_keywords, normalize_set
from .similarity import find_matching_keywords, jaccard_similarity
from .subject_index import SubjectIndex

__all__ = [
    "SubjectIndex",
    "IndexEntry",
    "IndexStats",
    "SubjectMatch",
    "create_index_entry",
    "normalize",
    "normalize_keywords",
    "normalize_set",
    "jaccard_similarity",
    "find_matching_keywords",
]
