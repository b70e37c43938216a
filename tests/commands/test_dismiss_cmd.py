# tests/commands/test_dismiss_cmd.py
"""Tests for the dismiss command."""

import os

from researchquest.commands import dismiss
from researchquest.models import Quest
from researchquest.stores import JSONQuestStore


class TestDismissCommand:
    def test_dismiss(self, data_dir):
        store = JSONQuestStore(os.path.join(data_dir, "data.json"))
        quest = Quest.create("Why?", "topic.md")
        store.save_quests([quest])

        result = dismiss.dismiss(quest.id, data_dir=data_dir)

        assert result.success is True
        assert result.quest.status == "dismissed"
        assert store.get_quests()[0].is_dismissed

    def test_unknown_id(self, data_dir):
        result = dismiss.dismiss("missing", data_dir=data_dir)

        assert result.success is False
        assert "Quest not found" in result.error

    def test_no_data_dir(self, temp_dir):
        result = dismiss.dismiss("any", data_dir=os.path.join(temp_dir, "nope"))

        assert result.success is False

    def test_unique_prefix(self, data_dir):
        store = JSONQuestStore(os.path.join(data_dir, "data.json"))
        quest = Quest.create("Why?", "topic.md")
        store.save_quests([quest])

        result = dismiss.dismiss(quest.id[:8], data_dir=data_dir)

        assert result.success is True
        assert result.quest.id == quest.id

    def test_ambiguous_prefix(self, data_dir, make_quest):
        store = JSONQuestStore(os.path.join(data_dir, "data.json"))
        store.save_quests([make_quest("A?", id="ab-1"), make_quest("B?", id="ab-2")])

        result = dismiss.dismiss("ab", data_dir=data_dir)

        assert result.success is False
        assert "matches 2 quests" in result.error
        assert not any(q.is_dismissed for q in store.get_quests())
