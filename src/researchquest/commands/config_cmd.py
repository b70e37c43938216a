# src/researchquest/commands/config_cmd.py
"""Config command - display current configuration.

This module provides the config display logic that the CLI uses.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from researchquest.commands.base import ConfigResult, SettingInfo
from researchquest.config import (
    build_settings,
    find_config_file,
    get_settings_from_env,
    get_settings_from_yaml,
    load_config,
    resolve_data_dir,
    resolve_storage_backend,
)


def _get_setting_source(
    key: str,
    yaml_settings: dict[str, Any],
    env_settings: dict[str, Any],
) -> str:
    """Determine the source of a setting value."""
    if key in env_settings:
        return "env var"
    if key in yaml_settings:
        return "yaml"
    return "default"


def _display(value: Any) -> str:
    if value is None:
        return "(not set)"
    return str(value)


def config(
    config_path: str | Path | None = None,
) -> ConfigResult:
    """Get current configuration settings.

    Args:
        config_path: Override config file path

    Returns:
        ConfigResult with all settings and their sources
    """
    try:
        cli_config = load_config(config_path)
    except (OSError, ValueError) as e:
        return ConfigResult(success=False, error=f"Failed to load config: {e}")

    env_settings = get_settings_from_env()
    yaml_settings = get_settings_from_yaml(cli_config)
    settings = build_settings(cli_config, env_settings)

    found_config_path = Path(config_path) if config_path else find_config_file()

    result = ConfigResult(success=True)
    result.config_path = str(found_config_path) if found_config_path else None
    result.provider = cli_config.get("provider", "litellm")

    if result.provider == "litellm":
        result.llm_model = cli_config.get("llm_model") or os.environ.get(
            "RESEARCHQUEST_LLM_MODEL"
        )

    result.data_dir = resolve_data_dir(None, cli_config)
    result.storage_backend = resolve_storage_backend(cli_config)

    for key in (
        "target_active_count",
        "context_size",
        "context_strategy",
        "validation_scope",
        "self_heal_obsolescence",
        "generation_temperature",
        "evaluation_temperature",
        "num_retries",
    ):
        result.settings.append(
            SettingInfo(
                name=key,
                value=_display(getattr(settings, key)),
                source=_get_setting_source(key, yaml_settings, env_settings),
            )
        )

    return result
