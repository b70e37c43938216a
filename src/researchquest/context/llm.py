# src/researchquest/context/llm.py
"""LLM-ranked context extraction with a midpoint-window fallback."""

import logging
import re

from researchquest.context.base import DEFAULT_CONTEXT_SIZE, ContextExtractor
from researchquest.context.window import midpoint_window, split_windows
from researchquest.providers.base import LLMClient

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = """Below is a research question followed by numbered passages from a document.
Pick the single passage that is most relevant to the question.

Question: {question}

{passages}

Return ONLY the number of the passage, no other text."""


class LLMContextExtractor(ContextExtractor):
    """Ask an LLM which window of the document best supports the question.

    The document is split into consecutive windows of target_size words and
    the model picks one by number. If no client is configured, the call fails,
    or the answer is not a valid passage number, the midpoint window is used.

    Example:
        from researchquest.providers.litellm import LiteLLMClient

        extractor = LLMContextExtractor(llm_client=LiteLLMClient())
        snapshot = await extractor.aextract(text, "How does X scale?")
    """

    def __init__(
        self,
        llm_client: LLMClient | None = None,
        prompt_template: str | None = None,
        temperature: float | None = 0.0,
    ) -> None:
        self._client = llm_client
        self.prompt_template = prompt_template or DEFAULT_PROMPT
        self.temperature = temperature

    def _build_prompt(self, question: str, windows: list[str]) -> str:
        passages = "\n\n".join(f"[{i}] {window}" for i, window in enumerate(windows))
        return self.prompt_template.format(question=question, passages=passages)

    def _parse_choice(self, response_text: str, windows: list[str]) -> str | None:
        match = re.search(r"\d+", response_text)
        if match is None:
            return None
        index = int(match.group(0))
        if 0 <= index < len(windows):
            return windows[index]
        return None

    def _windows(self, text: str, target_size: int) -> list[str] | None:
        """Candidate windows, or None when no ranking is needed."""
        if not text or len(text.split()) <= target_size or self._client is None:
            return None
        return split_windows(text, target_size)

    def extract(self, text: str, question: str, target_size: int = DEFAULT_CONTEXT_SIZE) -> str:
        windows = self._windows(text, target_size)
        if windows is None or self._client is None:
            return midpoint_window(text, target_size) if text else ""

        try:
            response_text = self._client.complete(
                messages=[{"role": "user", "content": self._build_prompt(question, windows)}],
                temperature=self.temperature,
            )
        except Exception as e:
            logger.warning("Context ranking failed, using midpoint window: %s", e)
            return midpoint_window(text, target_size)
        return self._parse_choice(response_text, windows) or midpoint_window(text, target_size)

    async def aextract(
        self, text: str, question: str, target_size: int = DEFAULT_CONTEXT_SIZE
    ) -> str:
        windows = self._windows(text, target_size)
        if windows is None or self._client is None:
            return midpoint_window(text, target_size) if text else ""

        try:
            response_text = await self._client.acomplete(
                messages=[{"role": "user", "content": self._build_prompt(question, windows)}],
                temperature=self.temperature,
            )
        except Exception as e:
            logger.warning("Context ranking failed, using midpoint window: %s", e)
            return midpoint_window(text, target_size)
        return self._parse_choice(response_text, windows) or midpoint_window(text, target_size)
