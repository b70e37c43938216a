# src/researchquest/models/quest.py
"""Quest data model."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from researchquest.exceptions import DuplicateQuestError

OBSOLETE_REASON = "Document content has changed significantly"


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


class Quest(BaseModel):
    """A research question tracked against a single document.

    Quests are immutable. State changes go through the copy-on-write helpers
    (complete, dismiss, mark_obsolete, clear_obsolete), which return a new
    instance and leave the original untouched.

    Field names are snake_case in Python; camelCase aliases are accepted on
    input and used by the JSON store, so data written by the original
    note-taking plugin loads unchanged.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(default_factory=lambda: str(uuid4()))
    question: str
    document_id: str
    document_path: str
    created_at: datetime = Field(default_factory=utcnow)

    is_completed: bool = False
    completed_at: datetime | None = None

    is_dismissed: bool = False
    dismissed_at: datetime | None = None

    is_obsolete: bool | None = None
    obsolete_reason: str | None = None
    last_validated: datetime | None = None

    context_hash: str | None = None
    context_snapshot: str | None = None

    # Hierarchical breakdown (data shape only)
    parent_id: str | None = None
    is_parent_question: bool | None = None

    @model_validator(mode="after")
    def _check_timestamps(self) -> Quest:
        if self.is_completed != (self.completed_at is not None):
            raise ValueError("completed_at must be set if and only if is_completed is true")
        if self.is_dismissed != (self.dismissed_at is not None):
            raise ValueError("dismissed_at must be set if and only if is_dismissed is true")
        return self

    @classmethod
    def create(
        cls,
        question: str,
        document_id: str,
        document_path: str | None = None,
        *,
        context_hash: str | None = None,
        context_snapshot: str | None = None,
        now: datetime | None = None,
    ) -> Quest:
        """Create a fresh, active quest for a document."""
        now = now or utcnow()
        return cls(
            question=question,
            document_id=document_id,
            document_path=document_path or document_id,
            created_at=now,
            context_hash=context_hash,
            context_snapshot=context_snapshot,
            last_validated=now,
        )

    @property
    def is_active(self) -> bool:
        """True if the quest is neither completed nor dismissed."""
        return not self.is_completed and not self.is_dismissed

    @property
    def has_context(self) -> bool:
        """True only when both the context hash and snapshot were captured."""
        return bool(self.context_hash) and bool(self.context_snapshot)

    def complete(self, now: datetime | None = None) -> Quest:
        if self.is_completed:
            return self
        return self.model_copy(update={"is_completed": True, "completed_at": now or utcnow()})

    def dismiss(self, now: datetime | None = None) -> Quest:
        if self.is_dismissed:
            return self
        return self.model_copy(update={"is_dismissed": True, "dismissed_at": now or utcnow()})

    def mark_obsolete(self, reason: str = OBSOLETE_REASON, now: datetime | None = None) -> Quest:
        return self.model_copy(
            update={
                "is_obsolete": True,
                "obsolete_reason": reason,
                "last_validated": now or utcnow(),
            }
        )

    def clear_obsolete(self, now: datetime | None = None) -> Quest:
        return self.model_copy(
            update={
                "is_obsolete": False,
                "obsolete_reason": None,
                "last_validated": now or utcnow(),
            }
        )


def ensure_unique_ids(quests: Iterable[Quest]) -> None:
    """Raise DuplicateQuestError if any id appears more than once."""
    counts = Counter(q.id for q in quests)
    duplicates = sorted(quest_id for quest_id, n in counts.items() if n > 1)
    if duplicates:
        raise DuplicateQuestError(duplicates)
