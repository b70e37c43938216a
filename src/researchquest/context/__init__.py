# src/researchquest/context/__init__.py
"""Context capture: fingerprints and excerpts used to detect document drift."""

from researchquest.context.base import DEFAULT_CONTEXT_SIZE, ContextExtractor
from researchquest.context.fingerprint import fingerprint
from researchquest.context.llm import LLMContextExtractor
from researchquest.context.window import WindowContextExtractor, midpoint_window

__all__ = [
    "DEFAULT_CONTEXT_SIZE",
    "ContextExtractor",
    "WindowContextExtractor",
    "LLMContextExtractor",
    "fingerprint",
    "midpoint_window",
]
