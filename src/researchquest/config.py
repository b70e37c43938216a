# src/researchquest/config.py
"""Configuration loading utilities for researchquest.

This module provides configuration loading for the CLI and for applications
embedding researchquest. It handles:
- Finding and loading researchquest.yaml config files
- Loading .env files for API keys
- Building Settings objects from YAML and RESEARCHQUEST_* env vars
- Creating ResearchQuest instances from configuration
"""

from __future__ import annotations

import importlib
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import yaml

if TYPE_CHECKING:
    from researchquest.research_quest import ResearchQuest
    from researchquest.settings import Settings
    from researchquest.stores import QuestStore

from researchquest.configuration.storage.local import StorageBackend

# Default paths
DEFAULT_DATA_DIR = "./quest_data"
CONFIG_FILES = ["researchquest.yaml", "researchquest.yml", ".researchquestrc"]
ENV_FILE = ".env"
ENV_PREFIX = "RESEARCHQUEST_"


@dataclass
class ConfigError:
    """Error during configuration loading."""

    message: str
    suggestion: str | None = None


def load_env_file(env_path: str | Path = ENV_FILE) -> None:
    """Load environment variables from a .env file if it exists.

    Existing environment variables are never overridden.

    Args:
        env_path: Path to .env file (default: .env in current directory)
    """
    path = Path(env_path)
    if not path.exists():
        return

    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip("\"'")
                if key not in os.environ:
                    os.environ[key] = value


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find a configuration file in the current directory or its parents.

    Args:
        start_dir: Directory to start searching from (default: cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir or Path.cwd()
    for _ in range(10):  # Limit search depth
        for config_name in CONFIG_FILES:
            config_path = current / config_name
            if config_path.exists():
                return config_path
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


VALID_ROOT_KEYS = {
    "provider",
    "llm_model",
    "data_dir",
    "storage_backend",
    "document_root",
    # Custom provider
    "question_generator",
    "question_evaluator",
    "context_extractor",
    "question_generator_kwargs",
    "question_evaluator_kwargs",
    "context_extractor_kwargs",
    # Settings section
    "settings",
}

# YAML key -> Settings field. Aliases map to the same field.
SETTINGS_KEY_MAPPINGS = {
    "target_active_count": "target_active_count",
    "target_count": "target_active_count",
    "context_size": "context_size",
    "context_strategy": "context_strategy",
    "validation_scope": "validation_scope",
    "self_heal_obsolescence": "self_heal_obsolescence",
    "generation_prompt": "generation_prompt",
    "evaluation_prompt": "evaluation_prompt",
    "generation_temperature": "generation_temperature",
    "evaluation_temperature": "evaluation_temperature",
    "num_retries": "num_retries",
}


def validate_config(config: dict[str, Any], config_path: Path | None = None) -> list[str]:
    """Validate config and return warnings about unknown keys.

    Args:
        config: The loaded configuration dictionary
        config_path: Path to config file (for error messages)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    unknown_root = set(config.keys()) - VALID_ROOT_KEYS
    if unknown_root:
        path_str = str(config_path) if config_path else "config"
        warnings.append(f"Unknown config keys in {path_str}: {', '.join(sorted(unknown_root))}")

    settings = config.get("settings", {})
    if isinstance(settings, dict):
        unknown_settings = set(settings.keys()) - set(SETTINGS_KEY_MAPPINGS)
        if unknown_settings:
            warnings.append(f"Unknown settings keys: {', '.join(sorted(unknown_settings))}")

    return warnings


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Configuration dictionary (empty if no config found)
    """
    config_path = Path(config_path) if config_path is not None else find_config_file()

    if config_path is None:
        return {}

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return config


def _safe_int(value: str | None) -> int | None:
    """Parse int from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _safe_float(value: str | None) -> float | None:
    """Parse float from string, returning None on invalid or empty value."""
    if value is None or value == "":
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _env(name: str) -> str | None:
    return os.environ.get(f"{ENV_PREFIX}{name}")


def get_settings_from_env() -> dict[str, Any]:
    """Read behavioral settings from RESEARCHQUEST_* environment variables.

    Only explicitly set values are returned, so YAML settings are used unless
    overridden by env vars.

    Returns:
        Dictionary of setting name -> value for explicitly set env vars
    """
    result: dict[str, Any] = {}

    if (val := _safe_int(_env("TARGET_ACTIVE_COUNT"))) is not None:
        result["target_active_count"] = val
    if (val := _safe_int(_env("CONTEXT_SIZE"))) is not None:
        result["context_size"] = val
    if (val := _safe_int(_env("NUM_RETRIES"))) is not None:
        result["num_retries"] = val
    if (strategy := _env("CONTEXT_STRATEGY")) in ("window", "llm"):
        result["context_strategy"] = strategy
    if (scope := _env("VALIDATION_SCOPE")) in ("collection", "document"):
        result["validation_scope"] = scope
    if (heal := _env("SELF_HEAL_OBSOLESCENCE")) is not None:
        result["self_heal_obsolescence"] = heal.lower() in ("true", "1", "yes")
    if (prompt := _env("GENERATION_PROMPT")) is not None:
        result["generation_prompt"] = prompt or None
    if (prompt := _env("EVALUATION_PROMPT")) is not None:
        result["evaluation_prompt"] = prompt or None
    if (temp := _env("GENERATION_TEMPERATURE")) is not None:
        result["generation_temperature"] = _safe_float(temp)
    if (temp := _env("EVALUATION_TEMPERATURE")) is not None:
        result["evaluation_temperature"] = _safe_float(temp)

    return result


def get_settings_from_yaml(config: dict[str, Any]) -> dict[str, Any]:
    """Extract settings from the 'settings:' section of a YAML config."""
    result: dict[str, Any] = {}
    yaml_settings = config.get("settings", {}) or {}

    for yaml_key, settings_key in SETTINGS_KEY_MAPPINGS.items():
        if yaml_key in yaml_settings:
            result[settings_key] = yaml_settings[yaml_key]

    return result


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
) -> Settings:
    """Build a Settings object from YAML config and env vars.

    Precedence (highest to lowest):
    1. Environment variables
    2. YAML settings: section
    3. Settings class defaults

    Args:
        config: YAML configuration dictionary
        env_settings: Environment variable overrides (if None, reads from env)

    Returns:
        Configured Settings instance
    """
    from researchquest.settings import Settings

    config = config or {}
    yaml_settings = get_settings_from_yaml(config)
    env_settings = env_settings if env_settings is not None else get_settings_from_env()

    return Settings(**{**yaml_settings, **env_settings})


def resolve_data_dir(data_dir: str | None, config: dict[str, Any]) -> str:
    """Pick the data directory: explicit override > env var > yaml > default."""
    return data_dir or _env("DATA_DIR") or config.get("data_dir") or DEFAULT_DATA_DIR


def resolve_storage_backend(config: dict[str, Any]) -> StorageBackend:
    """Pick the store backend: env var > yaml > json."""
    backend = (_env("STORAGE_BACKEND") or config.get("storage_backend") or "json").lower()
    return cast(StorageBackend, backend if backend in ("json", "sqlite") else "json")


def get_store(data_dir: str | Path, backend: StorageBackend = "json") -> QuestStore:
    """Get the quest store for operations that need no provider (list, dismiss, clear)."""
    from researchquest.configuration import LocalStorage

    return LocalStorage(str(data_dir), backend=backend).build_store()


def import_class(class_path: str) -> type[Any]:
    """Import a class from a dotted path like 'my_package.module.ClassName'."""
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return cast(type[Any], getattr(module, class_name))


@dataclass
class QuestConfig:
    """Configuration for creating a ResearchQuest instance."""

    provider: str
    llm_model: str | None
    data_dir: str
    storage_backend: StorageBackend
    settings: Settings
    document_root: str | None = None
    llm_api_key: str | None = None
    # Custom provider fields
    question_generator_class: str | None = None
    question_evaluator_class: str | None = None
    context_extractor_class: str | None = None
    question_generator_kwargs: dict[str, Any] | None = None
    question_evaluator_kwargs: dict[str, Any] | None = None
    context_extractor_kwargs: dict[str, Any] | None = None


def get_quest_config(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> QuestConfig | ConfigError:
    """Get configuration for creating a ResearchQuest instance.

    A missing llm_model is not an error here: the instance is created without
    capabilities and refreshes report themselves as not configured.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        QuestConfig with all settings, or ConfigError if invalid
    """
    config = load_config(config_path)
    effective_data_dir = resolve_data_dir(data_dir, config)
    provider = config.get("provider", "litellm")
    settings = build_settings(config)
    backend = resolve_storage_backend(config)
    document_root = config.get("document_root")

    if provider == "litellm":
        return QuestConfig(
            provider=provider,
            llm_model=config.get("llm_model") or _env("LLM_MODEL"),
            data_dir=effective_data_dir,
            storage_backend=backend,
            settings=settings,
            document_root=document_root,
            llm_api_key=_env("LLM_API_KEY"),
        )

    if provider == "custom":
        generator_class = config.get("question_generator")
        evaluator_class = config.get("question_evaluator")
        if not generator_class or not evaluator_class:
            return ConfigError(
                message="Custom provider requires question_generator and question_evaluator.",
                suggestion="Add these to researchquest.yaml as dotted class paths",
            )
        return QuestConfig(
            provider=provider,
            llm_model=None,
            data_dir=effective_data_dir,
            storage_backend=backend,
            settings=settings,
            document_root=document_root,
            question_generator_class=generator_class,
            question_evaluator_class=evaluator_class,
            context_extractor_class=config.get("context_extractor"),
            question_generator_kwargs=config.get("question_generator_kwargs", {}),
            question_evaluator_kwargs=config.get("question_evaluator_kwargs", {}),
            context_extractor_kwargs=config.get("context_extractor_kwargs", {}),
        )

    return ConfigError(
        message=f"Unknown provider '{provider}'",
        suggestion="Supported providers: litellm, custom",
    )


def create_research_quest(config: QuestConfig) -> ResearchQuest:
    """Create a ResearchQuest instance from configuration.

    Raises:
        ImportError: If custom provider classes cannot be imported
        ValueError: If the provider is unknown
    """
    from researchquest.configuration import LiteLLMProvider, LocalStorage
    from researchquest.research_quest import ResearchQuest

    storage = LocalStorage(config.data_dir, backend=config.storage_backend)

    if config.provider == "litellm":
        provider = (
            LiteLLMProvider(llm=config.llm_model, api_key=config.llm_api_key)
            if config.llm_model
            else None
        )
        return ResearchQuest(provider=provider, storage=storage, settings=config.settings)

    if config.provider == "custom":
        if not config.question_generator_class or not config.question_evaluator_class:
            raise ValueError("Custom provider requires generator and evaluator class paths")

        generator = import_class(config.question_generator_class)(
            **(config.question_generator_kwargs or {})
        )
        evaluator = import_class(config.question_evaluator_class)(
            **(config.question_evaluator_kwargs or {})
        )
        extractor = None
        if config.context_extractor_class:
            extractor = import_class(config.context_extractor_class)(
                **(config.context_extractor_kwargs or {})
            )

        @dataclass(frozen=True)
        class _CustomProvider:
            """Inline provider for custom implementations."""

            _question_generator: Any
            _question_evaluator: Any
            _context_extractor: Any

            def build_question_generator(self, settings: Settings) -> Any:
                return self._question_generator

            def build_question_evaluator(self, settings: Settings) -> Any:
                return self._question_evaluator

            def build_context_extractor(self, settings: Settings) -> Any:
                if self._context_extractor is None:
                    from researchquest.context import WindowContextExtractor

                    return WindowContextExtractor()
                return self._context_extractor

            def build_llm_client(self, settings: Settings | None = None) -> Any:
                raise NotImplementedError("Custom provider does not support build_llm_client.")

        return ResearchQuest(
            provider=_CustomProvider(
                _question_generator=generator,
                _question_evaluator=evaluator,
                _context_extractor=extractor,
            ),
            storage=storage,
            settings=config.settings,
        )

    raise ValueError(f"Unknown provider: {config.provider}")


def get_research_quest(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> ResearchQuest | ConfigError:
    """Create a ResearchQuest instance based on configuration.

    Convenience wrapper around get_quest_config and create_research_quest.
    """
    config = get_quest_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return config
    return create_research_quest(config)
