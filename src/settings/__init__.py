"""Configuration loading for coderef."""

from settings.config import (
    ASK,
    CONFIG_FILENAME,
    CodeRefConfig,
    ConfigError,
    load_config,
)

__all__ = [
    "ASK",
    "CONFIG_FILENAME",
    "CodeRefConfig",
    "ConfigError",
    "load_config",
]
