# src/researchquest/configuration/storage/local.py
"""Local filesystem storage configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from researchquest.stores import QuestStore

StorageBackend = Literal["json", "sqlite"]


@dataclass(frozen=True)
class LocalStorage:
    """Local filesystem storage.

    Quests are persisted under the data directory:
    - data.json: JSON backend (default), quests under the "quests" key
    - quests.db: SQLite backend

    Args:
        data_dir: Base directory for storage files. Created if it doesn't exist.
        backend: "json" or "sqlite".

    Example:
        storage = LocalStorage("./quest_data", backend="sqlite")
    """

    data_dir: str
    backend: StorageBackend = "json"

    def build_store(self) -> QuestStore:
        """Build the quest store, creating the data directory if needed."""
        from researchquest.stores import JSONQuestStore, SQLiteQuestStore

        Path(self.data_dir).mkdir(parents=True, exist_ok=True)

        if self.backend == "sqlite":
            return SQLiteQuestStore(os.path.join(self.data_dir, "quests.db"))
        return JSONQuestStore(os.path.join(self.data_dir, "data.json"))
