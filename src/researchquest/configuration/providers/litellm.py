# src/researchquest/configuration/providers/litellm.py
"""LiteLLM provider configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from researchquest.context import ContextExtractor
    from researchquest.providers import LLMClient
    from researchquest.questions import ClientResearchAssistant
    from researchquest.settings import Settings


@dataclass(frozen=True)
class LiteLLMProvider:
    """Provider configuration using LiteLLM for every model call.

    LiteLLM provides a unified interface to 100+ LLM providers including
    OpenAI, Anthropic, Azure, Bedrock, Ollama and more.

    Args:
        llm: LiteLLM model identifier used for generation, evaluation and
             (with context_strategy="llm") context ranking.
             Examples: "openai/gpt-4o-mini", "anthropic/claude-haiku-4-5-20251001"
        api_key: Optional API key passed to LiteLLM. If None, LiteLLM reads the
                 provider's environment variable.

    Example:
        provider = LiteLLMProvider(llm="openai/gpt-4o-mini")
    """

    llm: str
    api_key: str | None = None

    def build_llm_client(self, settings: Settings | None = None) -> LLMClient:
        """Build a LiteLLMClient.

        Args:
            settings: Optional settings containing num_retries. If None,
                     uses default retry value.
        """
        from researchquest.providers.litellm import LiteLLMClient

        num_retries = settings.num_retries if settings else 3
        return LiteLLMClient(model=self.llm, num_retries=num_retries, api_key=self.api_key)

    def _build_assistant(self, settings: Settings) -> ClientResearchAssistant:
        from researchquest.questions import ClientResearchAssistant

        return ClientResearchAssistant(
            llm_client=self.build_llm_client(settings),
            generation_prompt=settings.generation_prompt,
            evaluation_prompt=settings.evaluation_prompt,
            generation_temperature=settings.generation_temperature,
            evaluation_temperature=settings.evaluation_temperature,
        )

    def build_question_generator(self, settings: Settings) -> ClientResearchAssistant:
        """Build a ClientResearchAssistant used as the question generator."""
        return self._build_assistant(settings)

    def build_question_evaluator(self, settings: Settings) -> ClientResearchAssistant:
        """Build a ClientResearchAssistant used as the question evaluator."""
        return self._build_assistant(settings)

    def build_context_extractor(self, settings: Settings) -> ContextExtractor:
        """Build the extractor selected by settings.context_strategy.

        Returns:
            LLMContextExtractor if context_strategy="llm", WindowContextExtractor otherwise.
        """
        from researchquest.context import LLMContextExtractor, WindowContextExtractor

        if settings.context_strategy == "llm":
            return LLMContextExtractor(llm_client=self.build_llm_client(settings))
        return WindowContextExtractor()
