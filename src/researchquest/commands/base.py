# src/researchquest/commands/base.py
"""Base types for the commands layer.

This module defines the data structures used by all commands:
- Confirm callbacks for destructive commands (like clear)
- Result types for each command
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from researchquest.models import Quest


@dataclass
class ConfirmRequest:
    """Request for user confirmation before a destructive action.

    Attributes:
        message: The question to display to the user
        details: Extra detail about what will happen
    """

    message: str
    details: str | None = None


# Callback type for confirmation - returns True to proceed
ConfirmCallback = Callable[[ConfirmRequest], bool]


@dataclass
class CommandResult:
    """Base result type for commands."""

    success: bool
    error: str | None = None


@dataclass
class QuestInfo:
    """Display information about a stored quest."""

    id: str
    question: str
    document_id: str
    status: str  # "active", "completed", "dismissed", "obsolete"
    created_at: datetime | None = None

    @classmethod
    def from_quest(cls, quest: Quest) -> QuestInfo:
        if quest.is_dismissed:
            status = "dismissed"
        elif quest.is_completed:
            status = "completed"
        elif quest.is_obsolete:
            status = "obsolete"
        else:
            status = "active"
        return cls(
            id=quest.id,
            question=quest.question,
            document_id=quest.document_id,
            status=status,
            created_at=quest.created_at,
        )


@dataclass
class RefreshCommandResult(CommandResult):
    """Result of the refresh command.

    Attributes:
        document_id: Id of the refreshed document
        status: How the cycle ended (RefreshStatus value)
        evaluated: Quests sent for evaluation
        completed: Quests marked complete
        obsoleted: Quests newly flagged obsolete
        created: Quests generated
        active_count: Active quests for the document afterwards
        new_quests: The generated quests
    """

    document_id: str | None = None
    status: str = ""
    evaluated: int = 0
    completed: int = 0
    obsoleted: int = 0
    created: int = 0
    active_count: int = 0
    new_quests: list[QuestInfo] = field(default_factory=list)


@dataclass
class ListResult(CommandResult):
    """Result of the list command.

    Attributes:
        quests: Matching quests in stored order
    """

    quests: list[QuestInfo] = field(default_factory=list)


@dataclass
class DismissResult(CommandResult):
    """Result of the dismiss command."""

    quest: QuestInfo | None = None


@dataclass
class ClearResult(CommandResult):
    """Result of the clear command.

    Attributes:
        removed: Number of quests removed
    """

    removed: int = 0


@dataclass
class SettingInfo:
    """Information about a single setting."""

    name: str
    value: str
    source: str  # "env var", "yaml", "default"


@dataclass
class ConfigResult(CommandResult):
    """Result of the config command.

    Attributes:
        provider: Provider type (litellm, custom)
        llm_model: LLM model name
        data_dir: Data directory path
        storage_backend: Quest store backend (json, sqlite)
        settings: List of behavioral settings with sources
        config_path: Path to config file (if found)
    """

    provider: str = "litellm"
    llm_model: str | None = None
    data_dir: str = ""
    storage_backend: str = "json"
    settings: list[SettingInfo] = field(default_factory=list)
    config_path: str | None = None
