# src/researchquest/questions/base.py
"""Question generation and evaluation abstract base classes.

These are the two capabilities the Reconciler consumes. Both are opaque and
non-deterministic in production (LLM-backed); tests implement them with
canned responses.
"""

from abc import ABC, abstractmethod

from researchquest.models import EvaluationResult, QuestionRef


class QuestionGenerator(ABC):
    """Abstract base class for research question generation."""

    @abstractmethod
    def generate(self, document_text: str, count: int) -> list[str]:
        """Generate count research questions about the document.

        Implementations should return exactly count questions, but callers
        must tolerate a list of a different length.

        Raises:
            Exception: On capability unavailability or a malformed response.
                       Callers do not retry.
        """
        ...

    async def agenerate(self, document_text: str, count: int) -> list[str]:
        """Generate questions (async).

        Default implementation calls sync generate(). Override in subclasses
        for true async behavior.
        """
        return self.generate(document_text, count)


class QuestionEvaluator(ABC):
    """Abstract base class for deciding which questions a document answers."""

    @abstractmethod
    def evaluate(self, document_text: str, questions: list[QuestionRef]) -> EvaluationResult:
        """Evaluate whether each question is thoroughly answered by the document.

        Evaluations may omit questions or mention unknown ids; callers ignore both.
        """
        ...

    async def aevaluate(
        self, document_text: str, questions: list[QuestionRef]
    ) -> EvaluationResult:
        """Evaluate questions (async). Default implementation calls sync evaluate()."""
        return self.evaluate(document_text, questions)
