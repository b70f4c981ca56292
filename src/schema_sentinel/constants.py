"""Stable constants shared across the validator, config, and logging layers."""

from __future__ import annotations

from typing import Final

# Package-wide logger namespace; module loggers live beneath it.
LOGGER_NAME: Final[str] = "schema_sentinel"

# Configuration sources.
DEFAULT_CONFIG_FILE: Final[str] = "schema_sentinel.toml"
CONFIG_TABLE: Final[str] = "schema_sentinel"
ENV_PREFIX: Final[str] = "SCHEMA_SENTINEL_"

# Defaults for ``ValidatorSettings``.
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"
DEFAULT_LOG_FAILURES: Final[bool] = False

# Rendering of failure paths.
ROOT_PATH: Final[str] = "$"

__all__ = [
    "CONFIG_TABLE",
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_LOG_FAILURES",
    "DEFAULT_LOG_LEVEL",
    "ENV_PREFIX",
    "LOGGER_NAME",
    "ROOT_PATH",
]
