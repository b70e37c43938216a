# src/researchquest/providers/litellm/client.py
"""LiteLLM client implementation."""

from typing import Any

import litellm

from researchquest.providers.base import LLMClient
from researchquest.providers.litellm.models import DEFAULT_CHAT_MODEL


class LiteLLMClient(LLMClient):
    """LiteLLM-based LLM client for text generation.

    Supports any model available through LiteLLM (OpenAI, Anthropic, Gemini,
    Ollama, etc.). Retries on rate limits are delegated to LiteLLM.

    Example:
        client = LiteLLMClient(model="openai/gpt-4o-mini", num_retries=5)
        response = client.complete([{"role": "user", "content": "Hello"}])
    """

    def __init__(
        self,
        model: str = DEFAULT_CHAT_MODEL,
        num_retries: int = 3,
        api_key: str | None = None,
    ) -> None:
        """Initialize the LiteLLM client.

        Args:
            model: LiteLLM model identifier, e.g. "openai/gpt-4o-mini".
            num_retries: Number of retries on rate limit errors. LiteLLM handles
                        exponential backoff automatically. Default: 3.
            api_key: Optional API key. If None, LiteLLM reads the provider's
                     usual environment variable.
        """
        self.model = model
        self.num_retries = num_retries
        self.api_key = api_key

    def _completion_kwargs(self, messages: list[dict], temperature: float | None) -> dict[str, Any]:
        completion_kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "drop_params": True,
            "num_retries": self.num_retries,
        }
        if temperature is not None:
            completion_kwargs["temperature"] = temperature
        if self.api_key:
            completion_kwargs["api_key"] = self.api_key
        return completion_kwargs

    def _extract_content(self, response: Any) -> str:
        if not response.choices:
            raise ValueError(f"LLM returned no choices for model {self.model}")
        content = response.choices[0].message.content
        if content is None:
            raise ValueError(f"LLM returned None content for model {self.model}")
        return str(content)

    def complete(
        self,
        messages: list[dict],
        temperature: float | None = None,
    ) -> str:
        """Generate a completion using LiteLLM."""
        response = litellm.completion(**self._completion_kwargs(messages, temperature))
        return self._extract_content(response)

    async def acomplete(
        self,
        messages: list[dict],
        temperature: float | None = None,
    ) -> str:
        """Generate a completion using LiteLLM (async)."""
        response = await litellm.acompletion(**self._completion_kwargs(messages, temperature))
        return self._extract_content(response)
