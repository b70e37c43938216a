# src/researchquest/commands/clear.py
"""Clear command - remove every stored quest.

It uses callbacks for interactive confirmation, allowing each UI to
implement their own confirmation method.
"""

from __future__ import annotations

import os
from pathlib import Path

from researchquest.commands.base import ClearResult, ConfirmCallback, ConfirmRequest
from researchquest.config import get_store, load_config, resolve_data_dir, resolve_storage_backend
from researchquest.research_quest import ResearchQuest


def clear(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    on_confirm: ConfirmCallback | None = None,
) -> ClearResult:
    """Remove all quests from the store.

    Args:
        data_dir: Override data directory
        config_path: Override config file path
        on_confirm: Optional callback for confirmation. Return True to proceed,
            False to cancel. If None, clearing proceeds without confirmation
            (equivalent to --yes).

    Returns:
        ClearResult with the number of quests removed, or cancelled result
    """
    config = load_config(config_path)
    effective_data_dir = resolve_data_dir(data_dir, config)

    if not os.path.exists(effective_data_dir):
        return ClearResult(success=True, removed=0)

    store = get_store(effective_data_dir, resolve_storage_backend(config))
    rq = ResearchQuest.from_store(store=store)

    count = len(rq.quests())
    if count == 0:
        return ClearResult(success=True, removed=0)

    if on_confirm is not None:
        confirm_request = ConfirmRequest(
            message="Clear all quests?",
            details=f"This will permanently remove {count} quests. This cannot be undone.",
        )
        if not on_confirm(confirm_request):
            return ClearResult(success=False, error="Cancelled.")

    return ClearResult(success=True, removed=rq.clear())
