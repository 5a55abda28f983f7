"""Configuration loading from TOML files and environment variables."""

import os
import tomllib
from pathlib import Path
from typing import Any

from typedgraph.config.models import ConfigError, GraphConfig

CONFIG_ENV_VAR = "TYPEDGRAPH_CONFIG"


def _get_default_config_paths() -> list[Path]:
    """Get ordered list of default config file locations."""
    paths = [Path("typedgraph.toml")]  # Current directory
    if env_path := os.environ.get(CONFIG_ENV_VAR):
        paths.append(Path(env_path))
    return paths


def load_config(path: Path | None = None) -> GraphConfig:
    """Load graph configuration from the ``[graph]`` table of a TOML file.

    Args:
        path: Explicit path to config file. If None, searches default
            locations and falls back to defaults when none exists.

    Returns:
        Validated GraphConfig instance.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ConfigError: If the ``graph`` entry is not a table.
        pydantic.ValidationError: If config values are invalid.
    """
    config_path: Path | None = None

    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        for default_path in _get_default_config_paths():
            expanded = default_path.expanduser()
            if expanded.exists():
                config_path = expanded
                break

    raw_config: dict[str, Any] = {}
    if config_path is not None:
        with config_path.open("rb") as f:
            raw_config = tomllib.load(f)

    section = raw_config.get("graph", {})
    if not isinstance(section, dict):
        raise ConfigError(f"[graph] must be a table in {config_path}")

    return GraphConfig.model_validate(section)


def get_default_config() -> GraphConfig:
    """Get a default configuration for development/testing."""
    return GraphConfig()
