"""researchquest - research questions that follow your notes.

Keeps a small, fresh set of research questions per document: questions the
document now answers are marked complete, questions whose captured context
no longer matches the document are flagged obsolete, and new questions are
generated to top the set back up.

Quick Start (LiteLLM + Local Storage):
    from researchquest import LiteLLMProvider, LocalStorage, ResearchQuest

    rq = ResearchQuest(
        provider=LiteLLMProvider(llm="openai/gpt-4o-mini"),
        storage=LocalStorage("./quest_data"),
    )

    result = rq.refresh_file("notes/topic.md")
    for quest in rq.quests(result.document_id, active_only=True):
        print(quest.question)

Editor integration (own document source, change notifications):
    from researchquest import ResearchQuest
    from researchquest.stores import JSONQuestStore

    rq = ResearchQuest.from_store(
        provider=LiteLLMProvider(llm="openai/gpt-4o-mini"),
        store=JSONQuestStore("./vault/.plugin/data.json"),
    )
    reconciler = rq.reconciler(my_document_source, on_change=redraw_view)
    await reconciler.arefresh()
"""

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("researchquest")
except PackageNotFoundError:
    # Development / source-tree fallback (e.g. running tests without installing the wheel).
    try:
        import tomllib
        from pathlib import Path

        def _read_version_from_pyproject() -> str | None:
            for parent in Path(__file__).resolve().parents:
                pyproject = parent / "pyproject.toml"
                if pyproject.exists():
                    data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
                    version = data.get("project", {}).get("version")
                    return str(version) if version is not None else None
            return None

        __version__ = _read_version_from_pyproject() or "unknown"
    except Exception:
        __version__ = "unknown"

# Configuration objects
from researchquest.configuration import (
    LiteLLMProvider,
    LocalStorage,
    ProviderConfig,
    StorageConfig,
)

# Context capture
from researchquest.context import (
    ContextExtractor,
    LLMContextExtractor,
    WindowContextExtractor,
    fingerprint,
)

# Documents
from researchquest.documents import Document, DocumentSource, FileDocumentSource
from researchquest.exceptions import (
    AmbiguousQuestIdError,
    DocumentNotFoundError,
    DuplicateQuestError,
    MalformedResponseError,
    ResearchQuestError,
)

# Core models
from researchquest.models import EvaluationResult, Quest, QuestionEvaluation, QuestionRef

# Provider ABCs
from researchquest.providers import LLMClient
from researchquest.questions import ClientResearchAssistant, QuestionEvaluator, QuestionGenerator

# Reconciliation
from researchquest.reconciler import Reconciler, RefreshResult, RefreshStatus

# Central configuration
from researchquest.research_quest import ResearchQuest

# Configuration
from researchquest.settings import Settings

# Storage
from researchquest.stores import JSONQuestStore, QuestStore, SQLiteQuestStore
from researchquest.validator import validate_quests

__all__ = [
    # Version
    "__version__",
    # Models
    "Quest",
    "QuestionRef",
    "QuestionEvaluation",
    "EvaluationResult",
    # Exceptions
    "ResearchQuestError",
    "MalformedResponseError",
    "DuplicateQuestError",
    "DocumentNotFoundError",
    "AmbiguousQuestIdError",
    # Capability ABCs
    "QuestionGenerator",
    "QuestionEvaluator",
    "ContextExtractor",
    "DocumentSource",
    "QuestStore",
    "LLMClient",
    # Implementations
    "ClientResearchAssistant",
    "WindowContextExtractor",
    "LLMContextExtractor",
    "FileDocumentSource",
    "Document",
    "JSONQuestStore",
    "SQLiteQuestStore",
    # Reconciliation
    "Reconciler",
    "RefreshResult",
    "RefreshStatus",
    "validate_quests",
    "fingerprint",
    # Configuration
    "Settings",
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
    # Central
    "ResearchQuest",
]
