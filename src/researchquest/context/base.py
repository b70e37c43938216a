# src/researchquest/context/base.py
"""ContextExtractor abstract base class."""

from abc import ABC, abstractmethod

DEFAULT_CONTEXT_SIZE = 500


class ContextExtractor(ABC):
    """Abstract base class for picking the excerpt of a document relevant to a question."""

    @abstractmethod
    def extract(self, text: str, question: str, target_size: int = DEFAULT_CONTEXT_SIZE) -> str:
        """Return at most target_size words of text (the whole text if it is shorter)."""
        ...

    async def aextract(
        self, text: str, question: str, target_size: int = DEFAULT_CONTEXT_SIZE
    ) -> str:
        """Async variant. Default implementation calls sync extract()."""
        return self.extract(text, question, target_size)
