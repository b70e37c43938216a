"""Shared pytest fixtures."""

import asyncio
import os
import tempfile

import pytest

from researchquest.context import fingerprint
from researchquest.documents import Document, DocumentSource
from researchquest.models import EvaluationResult, Quest, QuestionEvaluation, QuestionRef
from researchquest.questions import QuestionEvaluator, QuestionGenerator
from researchquest.stores import QuestStore

DOCUMENT_TEXT = (
    "Photosynthesis converts light energy into chemical energy. "
    "Chlorophyll absorbs mostly blue and red light. "
    "The Calvin cycle fixes carbon dioxide into sugars."
)


class MemoryQuestStore(QuestStore):
    """In-memory store that records every save."""

    def __init__(self, quests: list[Quest] | None = None) -> None:
        self.quests = list(quests or [])
        self.saves: list[list[Quest]] = []

    def get_quests(self) -> list[Quest]:
        return list(self.quests)

    def save_quests(self, quests: list[Quest]) -> None:
        self.quests = list(quests)
        self.saves.append(list(quests))


class FakeDocumentSource(DocumentSource):
    """Serves one in-memory document as the active document."""

    def __init__(self, document_id: str | None = "notes/topic.md", text: str = DOCUMENT_TEXT):
        self.document = (
            Document(id=document_id, path=f"/vault/{document_id}") if document_id else None
        )
        self.text = text

    def get_active_document(self) -> Document | None:
        return self.document

    def read_text(self, document: Document) -> str:
        return self.text


class FakeGenerator(QuestionGenerator):
    """Returns numbered questions, or a fixed list if given."""

    def __init__(self, questions: list[str] | None = None, delay: float = 0.0) -> None:
        self.questions = questions
        self.delay = delay
        self.calls: list[int] = []

    def generate(self, document_text: str, count: int) -> list[str]:
        self.calls.append(count)
        if self.questions is not None:
            return list(self.questions)
        return [f"Generated question {i + 1}?" for i in range(count)]

    async def agenerate(self, document_text: str, count: int) -> list[str]:
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.generate(document_text, count)


class FailingGenerator(QuestionGenerator):
    def generate(self, document_text: str, count: int) -> list[str]:
        raise RuntimeError("generation service unavailable")


class FakeEvaluator(QuestionEvaluator):
    """Marks the given ids answered; records what it was asked about."""

    def __init__(self, answered: set[str] | None = None, extra_ids: set[str] | None = None):
        self.answered = answered or set()
        self.extra_ids = extra_ids or set()
        self.calls: list[list[QuestionRef]] = []

    def evaluate(self, document_text: str, questions: list[QuestionRef]) -> EvaluationResult:
        self.calls.append(list(questions))
        evaluations = [
            QuestionEvaluation(question_id=q.id, is_answered=q.id in self.answered)
            for q in questions
        ]
        evaluations += [
            QuestionEvaluation(question_id=quest_id, is_answered=True)
            for quest_id in self.extra_ids
        ]
        return EvaluationResult(evaluations=evaluations)


def _make_quest(
    question: str = "What does chlorophyll absorb?",
    document_id: str = "notes/topic.md",
    text: str | None = DOCUMENT_TEXT,
    **kwargs,
) -> Quest:
    """Build a quest whose captured context matches text (no context if text is None)."""
    if text is not None:
        kwargs.setdefault("context_hash", fingerprint(text))
        kwargs.setdefault("context_snapshot", text)
    return Quest(
        question=question,
        document_id=document_id,
        document_path=f"/vault/{document_id}",
        **kwargs,
    )


@pytest.fixture
def temp_dir():
    """Create a temporary directory for stores."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def data_dir(temp_dir):
    """A data directory inside temp_dir."""
    path = os.path.join(temp_dir, "data")
    os.makedirs(path)
    return path


@pytest.fixture
def memory_store():
    return MemoryQuestStore()


@pytest.fixture
def documents():
    return FakeDocumentSource()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep RESEARCHQUEST_* variables from the environment out of tests."""
    for key in list(os.environ):
        if key.startswith("RESEARCHQUEST_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def document_text():
    return DOCUMENT_TEXT


@pytest.fixture
def make_quest():
    """Factory for quests whose captured context matches a text."""
    return _make_quest


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def failing_generator():
    return FailingGenerator()


@pytest.fixture
def evaluator():
    return FakeEvaluator()
