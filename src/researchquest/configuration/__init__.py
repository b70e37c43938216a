# src/researchquest/configuration/__init__.py
"""Configuration objects for researchquest.

Provider configurations (build AI components):
- LiteLLMProvider: Uses LiteLLM for generation, evaluation and context ranking

Storage configurations (build the quest store):
- LocalStorage: JSON or SQLite under a local directory

Example:
    from researchquest import LiteLLMProvider, LocalStorage, ResearchQuest

    rq = ResearchQuest(
        provider=LiteLLMProvider(llm="openai/gpt-4o-mini"),
        storage=LocalStorage("./quest_data"),
    )
"""

from researchquest.configuration.base import ProviderConfig, StorageConfig
from researchquest.configuration.providers import LiteLLMProvider
from researchquest.configuration.storage import LocalStorage

__all__ = [
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
]
