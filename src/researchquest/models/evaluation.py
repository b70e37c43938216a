# src/researchquest/models/evaluation.py
"""Question evaluation data models."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class QuestionRef(BaseModel):
    """The slice of a quest sent to the evaluation capability."""

    id: str
    question: str


class QuestionEvaluation(BaseModel):
    """Verdict on whether the document answers one question."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    question_id: str
    is_answered: bool
    explanation: str = ""  # Informational only


class EvaluationResult(BaseModel):
    """Full response of the evaluation capability."""

    evaluations: list[QuestionEvaluation] = Field(default_factory=list)

    def answered_ids(self) -> set[str]:
        """Ids of every question marked as answered."""
        return {e.question_id for e in self.evaluations if e.is_answered}
