# src/researchquest/stores/json_store.py
"""JSON file quest store."""

import json
import os
from pathlib import Path
from typing import Any

from researchquest.models import Quest
from researchquest.stores.base import QuestStore

QUESTS_KEY = "quests"


class JSONQuestStore(QuestStore):
    """Keeps quests under one key of a JSON object on disk.

    Other keys in the file are preserved on save, so the file can double as
    a general settings blob (the layout used by note-taking app plugins).
    Quests are written with camelCase field names.
    """

    def __init__(self, path: str, key: str = QUESTS_KEY) -> None:
        """Initialize the store.

        Args:
            path: Path to the JSON file. Created on first save.
            key: Top-level key holding the quest list.
        """
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        self.path = path
        self.key = key

    def _load_data(self) -> dict[str, Any]:
        file_path = Path(self.path)
        if not file_path.exists():
            return {}
        content = file_path.read_text(encoding="utf-8")
        if not content.strip():
            return {}
        data = json.loads(content)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {self.path}")
        return data

    def get_quests(self) -> list[Quest]:
        """Load every stored quest."""
        raw_quests = self._load_data().get(self.key) or []
        return [Quest.model_validate(item) for item in raw_quests]

    def save_quests(self, quests: list[Quest]) -> None:
        """Replace the stored collection, keeping unrelated keys."""
        data = self._load_data()
        data[self.key] = [q.model_dump(mode="json", by_alias=True) for q in quests]

        # Write-then-rename so a crash mid-write leaves the old file intact
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
