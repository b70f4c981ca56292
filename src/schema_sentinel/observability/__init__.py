"""Opt-in structured logging."""

from schema_sentinel.observability.logging import (
    JsonLineFormatter,
    configure_logging,
    configure_logging_from_settings,
    parse_log_level,
    reset_logging,
)

__all__ = [
    "JsonLineFormatter",
    "configure_logging",
    "configure_logging_from_settings",
    "parse_log_level",
    "reset_logging",
]
