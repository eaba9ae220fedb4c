"""Configuration management."""

from .config import (
    DEFAULT_CONFIG_PATH,
    Config,
    ConfigError,
    ConnectionConfig,
    FilterConfig,
    load_config,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "Config",
    "ConfigError",
    "ConnectionConfig",
    "FilterConfig",
    "load_config",
]
