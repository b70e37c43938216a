# src/researchquest/configuration/base.py
"""Protocol definitions for configuration objects.

These protocols define the interfaces for provider and storage configurations.
Implementations can use @dataclass(frozen=True) for immutability.

Any frozen dataclass with the right methods is a valid configuration; it does
not need to inherit from these protocols.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from researchquest.context import ContextExtractor
    from researchquest.providers import LLMClient
    from researchquest.questions import QuestionEvaluator, QuestionGenerator
    from researchquest.settings import Settings
    from researchquest.stores import QuestStore


@runtime_checkable
class ProviderConfig(Protocol):
    """Protocol for provider configurations.

    Provider configurations build the AI components:
    - QuestionGenerator: Produces new research questions for a document
    - QuestionEvaluator: Decides which questions the document now answers
    - ContextExtractor: Picks the snapshot stored with each new quest

    Example implementation:
        @dataclass(frozen=True)
        class LiteLLMProvider:
            llm: str

            def build_question_generator(self, settings: Settings) -> QuestionGenerator: ...
            def build_question_evaluator(self, settings: Settings) -> QuestionEvaluator: ...
            def build_context_extractor(self, settings: Settings) -> ContextExtractor: ...
    """

    def build_question_generator(self, settings: Settings) -> QuestionGenerator:
        """Build the question generation capability.

        Args:
            settings: Settings containing generation_prompt, generation_temperature
                      and num_retries.
        """
        ...

    def build_question_evaluator(self, settings: Settings) -> QuestionEvaluator:
        """Build the question evaluation capability.

        Args:
            settings: Settings containing evaluation_prompt, evaluation_temperature
                      and num_retries.
        """
        ...

    def build_context_extractor(self, settings: Settings) -> ContextExtractor:
        """Build the context extractor selected by settings.context_strategy."""
        ...

    def build_llm_client(self, settings: Settings | None = None) -> LLMClient:
        """Build an LLM client for general-purpose completions."""
        ...


@runtime_checkable
class StorageConfig(Protocol):
    """Protocol for storage configurations.

    Example implementation:
        @dataclass(frozen=True)
        class LocalStorage:
            data_dir: str

            def build_store(self) -> QuestStore: ...
    """

    def build_store(self) -> QuestStore:
        """Build the quest store."""
        ...
