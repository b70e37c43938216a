# src/researchquest/stores/sqlite_quest.py
"""SQLite quest store implementation."""

import sqlite3
from pathlib import Path

from researchquest.models import Quest
from researchquest.stores.base import QuestStore


class SQLiteQuestStore(QuestStore):
    """SQLite-based quest store.

    Each quest is stored as a JSON document alongside its document id;
    save_quests replaces the whole table in one transaction.
    """

    def __init__(self, db_path: str) -> None:
        """Initialize the SQLite store."""
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Create tables if they don't exist."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS quests (
                    id TEXT PRIMARY KEY,
                    position INTEGER NOT NULL,
                    document_id TEXT NOT NULL,
                    data TEXT NOT NULL
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_document_id ON quests(document_id)")
            conn.commit()

    def get_quests(self) -> list[Quest]:
        """Load every stored quest, in save order."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("SELECT data FROM quests ORDER BY position")
            return [Quest.model_validate_json(row[0]) for row in cursor.fetchall()]

    def get_quests_for_document(self, document_id: str) -> list[Quest]:
        """Load the quests belonging to one document."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                "SELECT data FROM quests WHERE document_id = ? ORDER BY position",
                (document_id,),
            )
            return [Quest.model_validate_json(row[0]) for row in cursor.fetchall()]

    def save_quests(self, quests: list[Quest]) -> None:
        """Replace the stored collection."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("DELETE FROM quests")
            conn.executemany(
                """
                INSERT INTO quests (id, position, document_id, data)
                VALUES (?, ?, ?, ?)
                """,
                [
                    (q.id, position, q.document_id, q.model_dump_json(by_alias=True))
                    for position, q in enumerate(quests)
                ],
            )
            conn.commit()
