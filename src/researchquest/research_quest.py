# src/researchquest/research_quest.py
"""Central configuration class for researchquest."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from researchquest.configuration import ProviderConfig, StorageConfig
    from researchquest.context import ContextExtractor
    from researchquest.documents import DocumentSource
    from researchquest.models import Quest
    from researchquest.questions import QuestionEvaluator, QuestionGenerator
    from researchquest.reconciler import ChangeCallback, RefreshResult
    from researchquest.stores import QuestStore

from researchquest.exceptions import AmbiguousQuestIdError
from researchquest.models import utcnow
from researchquest.reconciler import Reconciler
from researchquest.settings import Settings


class ResearchQuest:
    """Central configuration for the quest store and AI components.

    ResearchQuest bundles the store and the capabilities together so you can
    configure once and create Reconcilers from it.

    1. With a storage config (developer-friendly):

        from researchquest import LiteLLMProvider, LocalStorage, ResearchQuest

        rq = ResearchQuest(
            provider=LiteLLMProvider(llm="openai/gpt-4o-mini"),
            storage=LocalStorage("./quest_data"),
        )
        result = rq.refresh_file("notes/topic.md")

    2. With an explicit store:

        from researchquest.stores import SQLiteQuestStore

        rq = ResearchQuest.from_store(
            provider=LiteLLMProvider(llm="openai/gpt-4o-mini"),
            store=SQLiteQuestStore("./quest_data/quests.db"),
        )

    Without a provider the instance can still list, dismiss and clear quests;
    refreshes are skipped as not configured.
    """

    def __init__(
        self,
        *,
        provider: ProviderConfig | None = None,
        # EITHER storage config...
        storage: StorageConfig | None = None,
        # ...OR explicit store
        store: QuestStore | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Create a ResearchQuest instance.

        Args:
            provider: Provider configuration (builds generator, evaluator, extractor).
                      None leaves the capabilities unconfigured.
            storage: Storage config (convenience). Mutually exclusive with store.
            store: Explicit quest store.
            settings: Behavioral settings (target count, context size, validation).

        Raises:
            ValueError: If neither or both of storage and store are provided.
        """
        self.settings = settings if settings is not None else Settings()

        if storage is not None:
            if store is not None:
                raise ValueError("Cannot mix 'storage' config with an explicit store")
            self.store = storage.build_store()
        elif store is not None:
            self.store = store
        else:
            raise ValueError("Must provide either 'storage' config or an explicit 'store'")

        self.question_generator: QuestionGenerator | None = None
        self.question_evaluator: QuestionEvaluator | None = None
        self.context_extractor: ContextExtractor | None = None
        if provider is not None:
            self.question_generator = provider.build_question_generator(self.settings)
            self.question_evaluator = provider.build_question_evaluator(self.settings)
            self.context_extractor = provider.build_context_extractor(self.settings)

    @classmethod
    def from_store(
        cls,
        *,
        store: QuestStore,
        provider: ProviderConfig | None = None,
        settings: Settings | None = None,
    ) -> ResearchQuest:
        """Create a ResearchQuest around an explicit store."""
        return cls(provider=provider, store=store, settings=settings)

    def reconciler(
        self,
        documents: DocumentSource,
        on_change: ChangeCallback | None = None,
    ) -> Reconciler:
        """Create a Reconciler sharing this instance's store and capabilities.

        Reuse the returned Reconciler across triggers: its in-flight guard is
        per instance.
        """
        return Reconciler(
            store=self.store,
            documents=documents,
            question_generator=self.question_generator,
            question_evaluator=self.question_evaluator,
            context_extractor=self.context_extractor,
            settings=self.settings,
            on_change=on_change,
        )

    async def arefresh_file(self, path: str, root: str | None = None) -> RefreshResult:
        """Run one refresh cycle with the file at path as the active document."""
        from researchquest.documents import FileDocumentSource

        return await self.reconciler(FileDocumentSource(path, root=root)).arefresh()

    def refresh_file(self, path: str, root: str | None = None) -> RefreshResult:
        """Synchronous version of arefresh_file()."""
        from researchquest.documents import FileDocumentSource

        return self.reconciler(FileDocumentSource(path, root=root)).refresh()

    def quests(self, document_id: str | None = None, active_only: bool = False) -> list[Quest]:
        """List stored quests, optionally for one document and/or active only."""
        if document_id is None:
            quests = self.store.get_quests()
        else:
            quests = self.store.get_quests_for_document(document_id)
        if active_only:
            quests = [q for q in quests if q.is_active]
        return quests

    def dismiss(self, quest_id: str) -> Quest:
        """Dismiss a quest by id and persist the change.

        quest_id may be the full id or a unique prefix of it, such as the
        shortened ids shown by the CLI.

        Returns:
            The dismissed quest.

        Raises:
            KeyError: If no quest id matches.
            AmbiguousQuestIdError: If the prefix matches several quests.
        """
        quests = self.store.get_quests()
        target_id = _resolve_quest_id(quests, quest_id)
        now = utcnow()
        dismissed: Quest | None = None
        updated = []
        for quest in quests:
            if quest.id == target_id:
                dismissed = quest.dismiss(now)
                updated.append(dismissed)
            else:
                updated.append(quest)

        assert dismissed is not None
        self.store.save_quests(updated)
        return dismissed

    def clear(self) -> int:
        """Remove every stored quest. Returns how many were removed."""
        count = len(self.store.get_quests())
        self.store.clear()
        return count


def _resolve_quest_id(quests: list[Quest], quest_id: str) -> str:
    """Map a full id or unique id prefix to a stored quest id."""
    if not quest_id:
        raise KeyError(quest_id)
    ids = [q.id for q in quests]
    if quest_id in ids:
        return quest_id
    matches = [i for i in ids if i.startswith(quest_id)]
    if not matches:
        raise KeyError(quest_id)
    if len(matches) > 1:
        raise AmbiguousQuestIdError(quest_id, matches)
    return matches[0]
