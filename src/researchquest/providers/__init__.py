# src/researchquest/providers/__init__.py
"""LLM provider abstractions for researchquest.

Usage:
    from researchquest.providers import LLMClient
    from researchquest.providers.litellm import LiteLLMClient, ChatModels
"""

from researchquest.providers.base import LLMClient
from researchquest.providers.litellm import ChatModels, LiteLLMClient

__all__ = [
    "LLMClient",
    "ChatModels",
    "LiteLLMClient",
]
