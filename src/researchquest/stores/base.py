# src/researchquest/stores/base.py
"""Abstract base class for quest storage."""

from abc import ABC, abstractmethod

from researchquest.models import Quest


class QuestStore(ABC):
    """Whole-collection load/save of quests.

    Stores are deliberately simple: no filtering on save, no transactions
    across calls, no concurrency control. Callers read the full collection,
    derive a new one, and write it back in full.
    """

    @abstractmethod
    def get_quests(self) -> list[Quest]:
        """Load every stored quest, across all documents."""
        ...

    @abstractmethod
    def save_quests(self, quests: list[Quest]) -> None:
        """Replace the stored collection with quests."""
        ...

    def get_quests_for_document(self, document_id: str) -> list[Quest]:
        """Load the quests belonging to one document."""
        return [q for q in self.get_quests() if q.document_id == document_id]

    def clear(self) -> None:
        """Remove every stored quest."""
        self.save_quests([])

    async def aget_quests(self) -> list[Quest]:
        """Async variant. Default implementation calls sync get_quests()."""
        return self.get_quests()

    async def asave_quests(self, quests: list[Quest]) -> None:
        """Async variant. Default implementation calls sync save_quests()."""
        self.save_quests(quests)
