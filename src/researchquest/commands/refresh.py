# src/researchquest/commands/refresh.py
"""Refresh command - run one reconciliation cycle for a document.

This module provides the refresh logic that the CLI uses.
"""

from __future__ import annotations

import os
from pathlib import Path

from researchquest.commands.base import QuestInfo, RefreshCommandResult
from researchquest.config import ConfigError, create_research_quest, get_quest_config
from researchquest.reconciler import RefreshStatus


def refresh(
    path: str,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    root: str | None = None,
) -> RefreshCommandResult:
    """Refresh the quests of a single document.

    Args:
        path: Path to the document file
        data_dir: Override data directory
        config_path: Override config file path
        root: Directory document ids are relative to (default: document_root
            from config; without either, ids are absolute paths)

    Returns:
        RefreshCommandResult with the cycle's outcome
    """
    if not os.path.isfile(path):
        return RefreshCommandResult(
            success=False,
            error=f"File not found: {path}",
        )

    config = get_quest_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        error = config.message
        if config.suggestion:
            error = f"{error} {config.suggestion}"
        return RefreshCommandResult(success=False, error=error)

    try:
        rq = create_research_quest(config)
    except (ImportError, ValueError) as e:
        return RefreshCommandResult(
            success=False,
            error=f"Failed to initialize: {e}",
        )

    outcome = rq.refresh_file(path, root=root or config.document_root)

    result = RefreshCommandResult(
        success=outcome.ok and outcome.status is not RefreshStatus.NOT_CONFIGURED,
        document_id=outcome.document_id,
        status=outcome.status.value,
        evaluated=outcome.evaluated,
        completed=len(outcome.completed_ids),
        obsoleted=len(outcome.obsoleted_ids),
        created=len(outcome.created),
        active_count=outcome.active_count,
        new_quests=[QuestInfo.from_quest(q) for q in outcome.created],
    )

    if outcome.status is RefreshStatus.NOT_CONFIGURED:
        result.error = (
            "No LLM model configured. "
            "Set llm_model in researchquest.yaml or RESEARCHQUEST_LLM_MODEL."
        )
    elif outcome.status is RefreshStatus.FAILED:
        result.error = outcome.error

    return result
