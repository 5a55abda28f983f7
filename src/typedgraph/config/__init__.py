"""Configuration module."""

from typedgraph.config.loader import get_default_config, load_config
from typedgraph.config.models import ConfigError, GraphConfig

__all__ = [
    "ConfigError",
    "GraphConfig",
    "get_default_config",
    "load_config",
]
