# subject_memory/memory/__init__.py
"""
The owning service and its index maintenance.

Usage:
    from subject_memory.memory import SubjectMemory

    memory = SubjectMemory(store, extractor)
    matches = memory.search(["rust", "cli"], limit=5)
"""

from .associations import AssociationRegistry, SubjectAssociation
from .coordinator import IndexCoordinator
from .scopes import ScopeRegistry, ScopeSettings
from .service import MemoryContext, SubjectMemory

__all__ = [
    "SubjectMemory",
    "MemoryContext",
    "IndexCoordinator",
    "ScopeSettings",
    "ScopeRegistry",
    "SubjectAssociation",
    "AssociationRegistry",
]
