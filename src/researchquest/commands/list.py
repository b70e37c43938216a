# src/researchquest/commands/list.py
"""List command - list stored quests.

This module provides the list logic that the CLI uses.
"""

from __future__ import annotations

import os
from pathlib import Path

from researchquest.commands.base import ListResult, QuestInfo
from researchquest.config import get_store, load_config, resolve_data_dir, resolve_storage_backend
from researchquest.documents import FileDocumentSource


def list_quests(
    path: str | None = None,
    active_only: bool = False,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    root: str | None = None,
) -> ListResult:
    """List stored quests.

    Args:
        path: Only list quests for the document at this path
        active_only: Only list quests that are neither completed nor dismissed
        data_dir: Override data directory
        config_path: Override config file path
        root: Directory document ids are relative to

    Returns:
        ListResult with quest information
    """
    config = load_config(config_path)
    effective_data_dir = resolve_data_dir(data_dir, config)

    if not os.path.exists(effective_data_dir):
        return ListResult(success=True, quests=[])

    try:
        store = get_store(effective_data_dir, resolve_storage_backend(config))
        if path is None:
            quests = store.get_quests()
        else:
            source = FileDocumentSource(root=root or config.get("document_root"))
            quests = store.get_quests_for_document(source.document_for(path).id)
    except Exception as e:
        return ListResult(
            success=False,
            error=f"Failed to read quests: {e}",
        )

    if active_only:
        quests = [q for q in quests if q.is_active]

    return ListResult(success=True, quests=[QuestInfo.from_quest(q) for q in quests])
