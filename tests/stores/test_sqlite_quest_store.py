# tests/stores/test_sqlite_quest_store.py
"""Tests for the SQLite quest store."""

import os

import pytest

from researchquest.models import Quest
from researchquest.stores import QuestStore, SQLiteQuestStore


@pytest.fixture
def store(temp_dir):
    return SQLiteQuestStore(os.path.join(temp_dir, "quests.db"))


class TestSQLiteQuestStore:
    def test_is_quest_store(self, store):
        assert isinstance(store, QuestStore)

    def test_empty(self, store):
        assert store.get_quests() == []

    def test_save_and_load_preserves_order(self, store):
        quests = [Quest.create(f"Q{i}?", "a.md") for i in range(5)]
        store.save_quests(quests)

        assert [q.id for q in store.get_quests()] == [q.id for q in quests]

    def test_roundtrip_keeps_state(self, store):
        quest = (
            Quest.create("Q?", "a.md", context_hash="h", context_snapshot="s")
            .complete()
            .mark_obsolete()
        )
        store.save_quests([quest])

        assert store.get_quests() == [quest]

    def test_save_replaces_collection(self, store):
        store.save_quests([Quest.create("Old?", "a.md")])
        new = Quest.create("New?", "b.md")
        store.save_quests([new])

        assert store.get_quests() == [new]

    def test_get_quests_for_document(self, store):
        a1 = Quest.create("A1?", "a.md")
        b = Quest.create("B?", "b.md")
        a2 = Quest.create("A2?", "a.md")
        store.save_quests([a1, b, a2])

        assert store.get_quests_for_document("a.md") == [a1, a2]
        assert store.get_quests_for_document("missing.md") == []

    def test_persists_across_instances(self, temp_dir):
        path = os.path.join(temp_dir, "quests.db")
        quest = Quest.create("Q?", "a.md")
        SQLiteQuestStore(path).save_quests([quest])

        assert SQLiteQuestStore(path).get_quests() == [quest]

    def test_clear(self, store):
        store.save_quests([Quest.create("Q?", "a.md")])
        store.clear()
        assert store.get_quests() == []
