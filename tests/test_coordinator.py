# tests/test_coordinator.py
"""
Tests for IndexCoordinator.

Tests cover:
1. Lazy build and explicit rebuild
2. Incremental updates only once built
3. Staleness and build failures
"""

from __future__ import annotations

import threading

import pytest

from subject_memory.core.exceptions import StoreError
from subject_memory.index import SubjectIndex
from subject_memory.memory import IndexCoordinator
from subject_memory.store import InMemorySubjectStore, SubjectDraft
from tests.conftest import HookStore, make_subject


class BrokenListingStore(InMemorySubjectStore):
    """Store whose listing fails."""

    def list_ids(self):
        raise StoreError("store offline")


@pytest.fixture
def store():
    return InMemorySubjectStore(
        [make_subject("s1", ["rust", "systems"]), make_subject("s2", ["rust", "web"])]
    )


@pytest.fixture
def coordinator(store):
    return IndexCoordinator(store, SubjectIndex())


class TestBuild:
    """Tests for build_index() and ensure_index()."""

    def test_not_built_initially(self, coordinator):
        """Test that nothing is indexed before the first build."""
        assert coordinator.is_built is False
        assert coordinator.stats() == {"initialized": False, "stats": None}
        assert len(coordinator.index) == 0

    def test_ensure_index_builds_once(self, coordinator, store):
        """Test that ensure_index() builds lazily and only once."""
        coordinator.ensure_index()
        assert coordinator.is_built
        assert len(coordinator.index) == 2

        # A direct store write bypasses the coordinator, so a second
        # ensure_index() must not pick it up.
        store.create(SubjectDraft(label="go", keywords=["go"]))
        coordinator.ensure_index()
        assert len(coordinator.index) == 2

    def test_build_index_resyncs(self, coordinator, store):
        """Test that an explicit rebuild reflects the whole store."""
        coordinator.ensure_index()
        store.create(SubjectDraft(label="go", keywords=["go"]))

        coordinator.build_index()

        assert len(coordinator.index) == 3

    def test_stats_after_build(self, coordinator):
        """Test the stats payload once built."""
        coordinator.build_index()

        stats = coordinator.stats()

        assert stats["initialized"] is True
        assert stats["stats"]["subject_count"] == 2
        assert stats["stats"]["distinct_keyword_count"] == 3

    def test_build_failure_propagates(self):
        """Test that store errors escape and leave the index unbuilt."""
        coordinator = IndexCoordinator(BrokenListingStore(), SubjectIndex())

        with pytest.raises(StoreError):
            coordinator.build_index()
        assert coordinator.is_built is False


class TestIncremental:
    """Tests for subject_written() and subject_deleted()."""

    def test_writes_ignored_before_build(self, coordinator, store):
        """Test that notifications before the first build are no-ops."""
        store.create(SubjectDraft(label="go", keywords=["go"]))
        coordinator.subject_written("subject-go")
        assert len(coordinator.index) == 0

        coordinator.ensure_index()
        assert "subject-go" in coordinator.index

    def test_subject_written_reprojects(self, coordinator, store):
        """Test that a written subject is re-read from the store."""
        coordinator.build_index()
        store.update("s1", SubjectDraft(keywords=["rust", "embedded"]))

        coordinator.subject_written("s1")

        assert coordinator.index.subjects_for_keyword("embedded") == {"s1"}
        assert coordinator.index.subjects_for_keyword("systems") == set()

    def test_subject_written_but_gone(self, coordinator, store):
        """Test that a subject missing from the store is removed from the index."""
        coordinator.build_index()
        store.delete("s1")

        coordinator.subject_written("s1")

        assert "s1" not in coordinator.index

    def test_subject_deleted(self, coordinator, store):
        """Test that deletes are reflected once built."""
        coordinator.build_index()
        store.delete("s2")

        coordinator.subject_deleted("s2")

        assert coordinator.index.subjects_for_keyword("web") == set()

    def test_mark_stale_forces_rebuild(self, coordinator, store):
        """Test that a stale index is rebuilt by the next ensure_index()."""
        coordinator.build_index()
        store.create(SubjectDraft(label="go", keywords=["go"]))

        coordinator.mark_stale()
        assert coordinator.is_built is False

        coordinator.ensure_index()
        assert "subject-go" in coordinator.index


class TestWritesDuringBuild:
    """Tests for writes that land while a build is reading the store."""

    @pytest.fixture
    def hook_store(self):
        return HookStore([make_subject("s1", ["rust", "systems"])])

    def test_same_thread_write_is_replayed(self, hook_store):
        """Test that a write made after listing still reaches the built index."""
        coordinator = IndexCoordinator(hook_store, SubjectIndex())

        def write_go():
            hook_store.create(SubjectDraft(label="go", keywords=["go"]))
            coordinator.subject_written("subject-go")

        hook_store.on_list = write_go
        coordinator.build_index()

        assert coordinator.is_built
        assert coordinator.index.subjects_for_keyword("go") == {"subject-go"}
        assert "s1" in coordinator.index

    def test_other_thread_write_waits_for_build(self, hook_store):
        """Test that a notification from another thread is applied after the build."""
        coordinator = IndexCoordinator(hook_store, SubjectIndex())
        stored = threading.Event()

        def writer():
            hook_store.create(SubjectDraft(label="go", keywords=["go"]))
            stored.set()
            coordinator.subject_written("subject-go")

        thread = threading.Thread(target=writer)

        def start_writer():
            thread.start()
            assert stored.wait(timeout=5)

        hook_store.on_list = start_writer
        coordinator.build_index()
        thread.join(timeout=5)

        assert not thread.is_alive()
        assert coordinator.index.subjects_for_keyword("go") == {"subject-go"}

    def test_failed_build_drops_queued_writes(self):
        """Test that a failing build leaves the index unbuilt for the next query."""

        class FailingGetStore(HookStore):
            def get(self, subject_id):
                raise StoreError("store offline")

        store = FailingGetStore([make_subject("s1", ["rust"])])
        coordinator = IndexCoordinator(store, SubjectIndex())
        store.on_list = lambda: coordinator.subject_written("s1")

        with pytest.raises(StoreError):
            coordinator.build_index()

        assert coordinator.is_built is False
        # Unbuilt again: notifications are no-ops until the next build.
        coordinator.subject_written("s1")
        assert len(coordinator.index) == 0
