# tests/conftest.py
"""
Shared fixtures for subject_memory tests.

Test Tiers:
===========
- tier1: Pure logic - normalizer, similarity, index, dedupe (<5s)
         Run: pytest -m tier1
- tier2: Service-level tests with in-memory fakes
         Run: pytest -m "tier1 or tier2"

Nothing here touches the network or a real store.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Union

import pytest

from subject_memory.config import ExtractionConfig, SubjectMemoryConfig
from subject_memory.extraction import TextRecord
from subject_memory.memory import SubjectMemory
from subject_memory.store import InMemorySubjectStore, Subject

# =============================================================================
# Tier Markers
# =============================================================================

TIER1_PATTERNS = [
    "test_normalize",
    "test_similarity",
    "test_subject_index",
    "test_dedupe",
    "test_frequency_extractor",
]


def pytest_collection_modifyitems(items):
    """Mark pure-logic test files tier1, everything else tier2."""
    for item in items:
        if any(marker.name.startswith("tier") for marker in item.iter_markers()):
            continue

        fspath = str(item.fspath)
        if any(pattern in fspath for pattern in TIER1_PATTERNS):
            item.add_marker(pytest.mark.tier1)
        else:
            item.add_marker(pytest.mark.tier2)


# =============================================================================
# Fakes
# =============================================================================


class DictKeywordExtractor:
    """Keyword extractor answering from a text -> keywords table.

    A table value that is an exception instance is raised instead.
    Unknown texts yield no keywords. With `honour_max_count=False` the
    whole table value comes back regardless of max_count.
    """

    def __init__(
        self,
        table: dict[str, Union[list[str], Exception]],
        honour_max_count: bool = True,
    ):
        self.table = table
        self.honour_max_count = honour_max_count
        self.calls: list[tuple[str, int]] = []

    def extract_keywords(self, text: str, max_count: int) -> list[str]:
        self.calls.append((text, max_count))
        value = self.table.get(text, [])
        if isinstance(value, Exception):
            raise value
        if not self.honour_max_count:
            return list(value)
        return list(value)[:max_count]


def make_records(*texts: str, prefix: str = "r") -> list[TextRecord]:
    """Records r1, r2, ... in the given order, without timestamps."""
    return [TextRecord(id=f"{prefix}{i}", text=text) for i, text in enumerate(texts, start=1)]


class HookStore(InMemorySubjectStore):
    """In-memory store that runs a one-shot hook right after listing ids.

    Lets a test write to the store while an index build is between
    listing the store and loading its subjects.
    """

    def __init__(self, subjects: Optional[Iterable[Subject]] = None):
        super().__init__(subjects)
        self.on_list: Optional[Callable[[], None]] = None

    def list_ids(self) -> list[str]:
        ids = super().list_ids()
        hook, self.on_list = self.on_list, None
        if hook is not None:
            hook()
        return ids


def make_subject(
    subject_id: str,
    keywords: Iterable[str],
    label: Optional[str] = None,
    sources: Optional[list] = None,
) -> Subject:
    keywords = list(keywords)
    return Subject(
        id=subject_id,
        label=label or " ".join(keywords),
        keywords=keywords,
        sources=sources or [],
    )


# The three-record batch used across pipeline and service tests.
#   r1 -> rust, cli, tools   (confidence 1/3)
#   r2 -> rust, web          (confidence 1/2)
#   r3 -> rust, cli          (confidence 5/6)
BATCH_TABLE = {
    "rust cli tools": ["rust", "cli", "tools"],
    "rust on the web": ["rust", "web"],
    "a rust cli": ["Rust", "CLI"],
}


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def batch_extractor() -> DictKeywordExtractor:
    return DictKeywordExtractor(dict(BATCH_TABLE))


@pytest.fixture
def batch_records() -> list[TextRecord]:
    return make_records("rust cli tools", "rust on the web", "a rust cli")


@pytest.fixture
def store() -> InMemorySubjectStore:
    return InMemorySubjectStore()


@pytest.fixture
def memory(store, batch_extractor) -> SubjectMemory:
    """SubjectMemory over an empty in-memory store with the batch extractor."""
    return SubjectMemory(store, extractor=batch_extractor)


@pytest.fixture
def permissive_config() -> SubjectMemoryConfig:
    """Config that keeps every candidate."""
    return SubjectMemoryConfig(extraction=ExtractionConfig(min_confidence=0.0))
