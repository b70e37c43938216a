# src/researchquest/questions/__init__.py
"""Question generation and evaluation for researchquest."""

from researchquest.questions.base import QuestionEvaluator, QuestionGenerator
from researchquest.questions.client import ClientResearchAssistant

__all__ = [
    "QuestionGenerator",
    "QuestionEvaluator",
    "ClientResearchAssistant",
]
