# src/researchquest/settings.py
"""Behavioral settings for researchquest.

Settings are passed programmatically - the library does not read from
environment variables. For env-based config, read env vars at the
application layer (see researchquest.config) and pass values explicitly.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

ContextStrategy = Literal["window", "llm"]
ValidationScope = Literal["collection", "document"]


class Settings(BaseModel):
    """Behavioral settings for quest reconciliation.

    Example:
        settings = Settings(target_active_count=3, validation_scope="document")
    """

    # Number of active quests kept per document
    target_active_count: int = Field(default=5, ge=0)

    # Context capture
    context_size: int = Field(default=500, ge=1)  # Words in each snapshot
    context_strategy: ContextStrategy = "window"

    # Validation
    # "collection" checks every stored quest against the active document's text;
    # "document" leaves other documents' quests alone.
    validation_scope: ValidationScope = "collection"
    self_heal_obsolescence: bool = False

    # Prompts and sampling
    generation_prompt: str | None = None
    evaluation_prompt: str | None = None
    generation_temperature: float | None = 0.7
    evaluation_temperature: float | None = 0.0

    # Retry configuration (LiteLLM handles exponential backoff for RateLimitError)
    num_retries: int = 3
