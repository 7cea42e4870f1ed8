# tests/test_store.py
"""
Tests for subject_memory.store.

Tests cover:
1. Subject / SubjectSource models - serialization, keyword and source merging
2. InMemorySubjectStore - create, merge-on-create, update, delete, copies
"""

from __future__ import annotations

import pytest

from subject_memory.core.exceptions import StoreError
from subject_memory.store import (
    InMemorySubjectStore,
    Subject,
    SubjectDraft,
    SubjectSource,
    subject_id_for_label,
)

# ---------------------------------------------------------------------------
# Tests for models.py
# ---------------------------------------------------------------------------


class TestSubjectModel:
    """Tests for Subject and SubjectSource."""

    def test_roundtrip_dict(self):
        """Test to_dict() / from_dict() preserve every field."""
        subject = Subject(
            id="subject-rust",
            label="rust",
            description="systems language",
            keywords=["rust", "cargo"],
            metadata={"origin": "chat"},
            sources=[SubjectSource(kind="scope", source_id="chat-1", confidence=0.75)],
        )

        restored = Subject.from_dict(subject.to_dict())

        assert restored == subject

    def test_add_keywords_skips_existing(self):
        """Test that add_keywords() appends only new keywords."""
        subject = Subject(id="s", label="s", keywords=["rust"])
        subject.add_keywords(["rust", "cli", "cli"])
        assert subject.keywords == ["rust", "cli"]

    def test_add_keywords_compares_normalized_form(self):
        """Test that case and punctuation variants of a keyword are not added twice."""
        subject = Subject(id="s", label="s", keywords=["rust"])
        subject.add_keywords(["RUST", "Rust!", "cli", "CLI", "!!"])
        assert subject.keywords == ["rust", "cli"]

    def test_add_source_dedupes_on_kind_and_id(self):
        """Test that the same (kind, source_id) is stored once."""
        subject = Subject(id="s", label="s")
        subject.add_source(SubjectSource(kind="scope", source_id="chat-1"))
        subject.add_source(SubjectSource(kind="scope", source_id="chat-1", confidence=0.9))
        subject.add_source(SubjectSource(kind="manual", source_id="chat-1"))

        assert [s.key for s in subject.sources] == [("scope", "chat-1"), ("manual", "chat-1")]


class TestSubjectIdForLabel:
    """Tests for subject_id_for_label()."""

    def test_slug(self):
        """Test slug derivation."""
        assert subject_id_for_label("Rust Systems!") == "subject-rust-systems"
        assert subject_id_for_label("rust  cli_tools") == "subject-rust-cli-tools"

    def test_unsluggable_label_gets_random_id(self):
        """Test that labels without word characters still get an id."""
        subject_id = subject_id_for_label("!!!")
        assert subject_id.startswith("subject-")
        assert len(subject_id) > len("subject-")


# ---------------------------------------------------------------------------
# Tests for memory.py
# ---------------------------------------------------------------------------


class TestInMemorySubjectStore:
    """Tests for InMemorySubjectStore."""

    @pytest.fixture
    def store(self):
        return InMemorySubjectStore()

    def test_create_derives_id(self, store):
        """Test that create() derives a slug id when none is given."""
        result = store.create(SubjectDraft(label="rust cli", keywords=["rust", "cli"]))

        assert result.subject_id == "subject-rust-cli"
        assert result.created is True
        assert store.get("subject-rust-cli").keywords == ["rust", "cli"]

    def test_create_uses_explicit_id(self, store):
        """Test that an explicit subject_id is kept."""
        result = store.create(SubjectDraft(label="rust", subject_id="s1"))
        assert result.subject_id == "s1"

    def test_create_requires_label(self, store):
        """Test that an empty label is rejected."""
        with pytest.raises(StoreError):
            store.create(SubjectDraft(label="  "))

    def test_create_merges_same_normalized_label(self, store):
        """Test that a matching label merges instead of duplicating."""
        store.create(
            SubjectDraft(
                label="rust cli",
                description="short",
                keywords=["rust", "cli"],
                sources=[SubjectSource(kind="scope", source_id="chat-1")],
            )
        )

        result = store.create(
            SubjectDraft(
                label="Rust-CLI",
                subject_id="other-id",
                description="a longer description",
                keywords=["cli", "tools"],
                sources=[SubjectSource(kind="scope", source_id="chat-2")],
            )
        )

        assert result.subject_id == "subject-rust-cli"
        assert result.created is False
        assert len(store) == 1

        merged = store.get("subject-rust-cli")
        assert merged.keywords == ["rust", "cli", "tools"]
        assert merged.description == "a longer description"
        assert [s.source_id for s in merged.sources] == ["chat-1", "chat-2"]

    def test_merge_keeps_longer_description(self, store):
        """Test that a shorter description does not replace a longer one."""
        store.create(SubjectDraft(label="rust", description="a long description"))
        store.create(SubjectDraft(label="rust", description="short"))
        assert store.get("subject-rust").description == "a long description"

    def test_update_replaces_given_fields(self, store):
        """Test that update() applies only non-None fields."""
        store.create(SubjectDraft(label="rust", description="d", keywords=["rust", "cli"]))

        result = store.update("subject-rust", SubjectDraft(keywords=["rust", "web"]))

        subject = store.get("subject-rust")
        assert result.subject_id == "subject-rust"
        assert subject.keywords == ["rust", "web"]
        assert subject.description == "d"
        assert subject.updated_at >= subject.created_at

    def test_update_unknown(self, store):
        """Test that updating an unknown subject returns None."""
        assert store.update("missing", SubjectDraft(label="x")) is None

    def test_delete(self, store):
        """Test delete() for known and unknown ids."""
        store.create(SubjectDraft(label="rust"))

        assert store.delete("subject-rust") is True
        assert store.delete("subject-rust") is False
        assert store.get("subject-rust") is None
        assert store.list_ids() == []

    def test_get_returns_copy(self, store):
        """Test that mutating a fetched subject leaves the store untouched."""
        store.create(SubjectDraft(label="rust", keywords=["rust"]))

        fetched = store.get("subject-rust")
        fetched.keywords.append("web")

        assert store.get("subject-rust").keywords == ["rust"]

    def test_seeded_store(self):
        """Test construction from existing subjects."""
        store = InMemorySubjectStore([Subject(id="s1", label="one"), Subject(id="s2", label="two")])
        assert sorted(store.list_ids()) == ["s1", "s2"]
