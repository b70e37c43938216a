# src/researchquest/commands/dismiss.py
"""Dismiss command - hide a quest without answering it."""

from __future__ import annotations

import os
from pathlib import Path

from researchquest.commands.base import DismissResult, QuestInfo
from researchquest.config import get_store, load_config, resolve_data_dir, resolve_storage_backend
from researchquest.exceptions import AmbiguousQuestIdError
from researchquest.research_quest import ResearchQuest


def dismiss(
    quest_id: str,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> DismissResult:
    """Dismiss a quest by id.

    Args:
        quest_id: Id of the quest to dismiss, or a unique prefix of it
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        DismissResult with the dismissed quest
    """
    config = load_config(config_path)
    effective_data_dir = resolve_data_dir(data_dir, config)

    if not os.path.exists(effective_data_dir):
        return DismissResult(success=False, error="No quest data found.")

    store = get_store(effective_data_dir, resolve_storage_backend(config))
    rq = ResearchQuest.from_store(store=store)

    try:
        quest = rq.dismiss(quest_id)
    except KeyError:
        return DismissResult(success=False, error=f"Quest not found: {quest_id}")
    except AmbiguousQuestIdError as e:
        return DismissResult(success=False, error=f"{e}. Use more characters of the id.")

    return DismissResult(success=True, quest=QuestInfo.from_quest(quest))
