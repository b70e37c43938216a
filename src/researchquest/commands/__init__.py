# src/researchquest/commands/__init__.py
"""UI-agnostic command layer for researchquest.

Commands return data structures, allowing UIs to render results appropriately.

Usage:
    from researchquest.commands import list_cmd, refresh

    # Refresh one document's quests
    result = refresh.refresh("notes/topic.md")

    # List active quests for that document
    result = list_cmd.list_quests("notes/topic.md", active_only=True)
"""

# Import command modules for easy access
from researchquest.commands import clear, config_cmd, dismiss, refresh
from researchquest.commands import list as list_cmd
from researchquest.commands.base import (
    ClearResult,
    CommandResult,
    ConfigResult,
    ConfirmCallback,
    ConfirmRequest,
    DismissResult,
    ListResult,
    QuestInfo,
    RefreshCommandResult,
    SettingInfo,
)

__all__ = [
    # Base types
    "ConfirmRequest",
    "ConfirmCallback",
    "CommandResult",
    # Result types
    "RefreshCommandResult",
    "QuestInfo",
    "ListResult",
    "DismissResult",
    "ClearResult",
    "ConfigResult",
    "SettingInfo",
    # Command modules
    "refresh",
    "list_cmd",
    "dismiss",
    "clear",
    "config_cmd",
]
