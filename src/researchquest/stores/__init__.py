# src/researchquest/stores/__init__.py
"""Storage abstractions for researchquest."""

from researchquest.stores.base import QuestStore
from researchquest.stores.json_store import JSONQuestStore
from researchquest.stores.sqlite_quest import SQLiteQuestStore

__all__ = [
    "QuestStore",
    "JSONQuestStore",
    "SQLiteQuestStore",
]
