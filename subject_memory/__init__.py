"""
subject_memory - Keyword Subject Memory

Extracts recurring topics ("subjects") from batches of text records,
deduplicates and stores them, and answers "which known subjects relate to
these keywords?" from an in-memory keyword index ranked by Jaccard
similarity.

Quick Start:
    >>> from subject_memory import InMemorySubjectStore, SubjectMemory
    >>> from subject_memory.extraction import FrequencyKeywordExtractor
    >>> memory = SubjectMemory(InMemorySubjectStore(), FrequencyKeywordExtractor())
    >>> memory.enable_scope("chat-1")
    >>> result = memory.extract_and_store("chat-1", records)
    >>> matches = memory.search(["rust", "cli"])

Public API:
    Service:
        - SubjectMemory: Query, maintenance and extraction API
        - MemoryContext: Subjects related to a piece of free text

    Index:
        - SubjectIndex: Posting lists + Jaccard ranking
        - IndexEntry, SubjectMatch, IndexStats
        - normalize: Keyword normalizer

    Store:
        - SubjectStore: Store contract
        - InMemorySubjectStore: Reference store
        - Subject, SubjectDraft, SubjectSource

Architecture:
    subject_memory/
    ├── index/        # Normalizer, SubjectIndex, similarity
    ├── extraction/   # Keyword extraction pipeline
    ├── store/        # Subject store contract + in-memory store
    ├── memory/       # Coordinator, scopes, associations, service
    ├── config/       # Pydantic schema + YAML loader
    ├── core/         # Exceptions
    └── logging/      # Logger setup + tags
"""

__version__ = "0.1.0"

# =============================================================================
# CORE TYPES
# =============================================================================

from subject_memory.config import SubjectMemoryConfig, load_config
from subject_memory.core import (
    ConfigError,
    ExtractionError,
    ExtractorUnavailableError,
    PreconditionError,
    ScopeNotEnabledError,
    StoreError,
    SubjectMemoryError,
)
from subject_memory.extraction import (
    ExtractedSubject,
    ExtractionResult,
    KeywordExtractor,
    TextRecord,
)
from subject_memory.index import (
    IndexEntry,
    IndexStats,
    SubjectIndex,
    SubjectMatch,
    create_index_entry,
    normalize,
)
from subject_memory.memory import MemoryContext, SubjectMemory
from subject_memory.store import (
    InMemorySubjectStore,
    Subject,
    SubjectDraft,
    SubjectSource,
    SubjectStore,
)

# =============================================================================
# PUBLIC API
# =============================================================================

__all__ = [
    # Version
    "__version__",
    # Service
    "SubjectMemory",
    "MemoryContext",
    # Index
    "SubjectIndex",
    "IndexEntry",
    "IndexStats",
    "SubjectMatch",
    "create_index_entry",
    "normalize",
    # Store
    "SubjectStore",
    "InMemorySubjectStore",
    "Subject",
    "SubjectDraft",
    "SubjectSource",
    # Extraction
    "KeywordExtractor",
    "TextRecord",
    "ExtractedSubject",
    "ExtractionResult",
    # Config
    "SubjectMemoryConfig",
    "load_config",
    # Exceptions
    "SubjectMemoryError",
    "PreconditionError",
    "ExtractorUnavailableError",
    "ScopeNotEnabledError",
    "ExtractionError",
    "StoreError",
    "ConfigError",
]
