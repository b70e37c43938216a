# src/researchquest/models/__init__.py
"""Data models for researchquest."""

from researchquest.models.evaluation import EvaluationResult, QuestionEvaluation, QuestionRef
from researchquest.models.quest import OBSOLETE_REASON, Quest, ensure_unique_ids, utcnow

__all__ = [
    "Quest",
    "QuestionRef",
    "QuestionEvaluation",
    "EvaluationResult",
    "OBSOLETE_REASON",
    "ensure_unique_ids",
    "utcnow",
]
