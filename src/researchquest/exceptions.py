# src/researchquest/exceptions.py
"""Exceptions raised by researchquest."""


class ResearchQuestError(Exception):
    """Base class for researchquest errors."""


class MalformedResponseError(ResearchQuestError):
    """Raised when an LLM response cannot be parsed into the expected shape.

    Attributes:
        response_text: The raw text returned by the model.
    """

    def __init__(self, message: str, response_text: str = "") -> None:
        super().__init__(message)
        self.response_text = response_text


class DuplicateQuestError(ResearchQuestError):
    """Raised when a quest collection contains the same id more than once."""

    def __init__(self, quest_ids: list[str]) -> None:
        super().__init__(f"Duplicate quest ids: {', '.join(quest_ids)}")
        self.quest_ids = quest_ids


class DocumentNotFoundError(ResearchQuestError, FileNotFoundError):
    """Raised when a document's text cannot be read."""


class AmbiguousQuestIdError(ResearchQuestError):
    """Raised when a quest id prefix matches more than one quest."""

    def __init__(self, prefix: str, quest_ids: list[str]) -> None:
        super().__init__(f"Quest id '{prefix}' matches {len(quest_ids)} quests")
        self.prefix = prefix
        self.quest_ids = quest_ids
