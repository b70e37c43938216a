# src/researchquest/providers/litellm/__init__.py
"""LiteLLM provider client for researchquest.

Usage:
    from researchquest.providers.litellm import LiteLLMClient, ChatModels
    from researchquest.questions import ClientResearchAssistant

    client = LiteLLMClient(model=ChatModels.GPT_4O_MINI)
    assistant = ClientResearchAssistant(llm_client=client)
"""

from researchquest.providers.litellm.client import LiteLLMClient
from researchquest.providers.litellm.models import ChatModels

__all__ = [
    "ChatModels",
    "LiteLLMClient",
]
