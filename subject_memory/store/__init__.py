# subject_memory/store/__init__.py
"""
Subject store contract, models and the in-memory reference store.

Usage:
    from subject_memory.store import InMemorySubjectStore, SubjectDraft

    store = InMemorySubjectStore()
    result = store.create(SubjectDraft(label="rust cli", keywords=["rust", "cli"]))
"""

from .base import SubjectStore
from .memory import InMemorySubjectStore, subject_id_for_label
from .models import StoreResult, Subject, SubjectDraft, SubjectSource

__all__ = [
    "SubjectStore",
    "InMemorySubjectStore",
    "subject_id_for_label",
    "Subject",
    "SubjectSource",
    "SubjectDraft",
    "StoreResult",
]
