# src/researchquest/configuration/providers/__init__.py
"""Provider configurations for researchquest."""

from researchquest.configuration.providers.litellm import LiteLLMProvider

__all__ = ["LiteLLMProvider"]
