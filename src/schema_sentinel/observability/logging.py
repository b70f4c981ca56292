"""Opt-in JSON-lines logging for the ``schema_sentinel`` logger namespace.

Nothing here runs at import time; library modules only call
``logging.getLogger(__name__)``. Applications that want structured output
call ``configure_logging`` once.
"""

from __future__ import annotations

import json
import logging
import math
import sys
import threading
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final, TextIO

from schema_sentinel.constants import LOGGER_NAME
from schema_sentinel.domain.values import JSONValue

if TYPE_CHECKING:
    from schema_sentinel.config.settings import ValidatorSettings

_NON_FINITE_VALUE: Final[str] = "non-finite"

_STANDARD_LOG_RECORD_FIELDS: Final[frozenset[str]] = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "thread",
        "threadName",
        "taskName",
    }
)

_HANDLER_LOCK = threading.Lock()
_INSTALLED_HANDLERS: dict[str, logging.Handler] = {}


class JsonLineFormatter(logging.Formatter):
    """Formatter that emits one canonical JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, JSONValue] = {
            "timestamp": _iso8601z_from_epoch(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = _extract_extra_fields(record)
        if extras:
            event["fields"] = extras

        if record.exc_info is not None:
            event["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            event["stack"] = str(record.stack_info)

        return json.dumps(event, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def configure_logging(
    level: int | str = "INFO",
    *,
    stream: TextIO | None = None,
    json_lines: bool = True,
    logger_name: str = LOGGER_NAME,
) -> logging.Logger:
    """Attach a single stream handler to ``logger_name`` and return the logger.

    Calling again replaces the handler installed by the previous call, so
    repeated configuration never duplicates output. Propagation is disabled.
    """

    resolved_level = parse_log_level(level)
    name = _validate_logger_name(logger_name)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    if json_lines:
        handler.setFormatter(JsonLineFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    logger = logging.getLogger(name)
    with _HANDLER_LOCK:
        previous = _INSTALLED_HANDLERS.pop(name, None)
        if previous is not None:
            logger.removeHandler(previous)
            previous.close()
        logger.addHandler(handler)
        _INSTALLED_HANDLERS[name] = handler

    logger.setLevel(resolved_level)
    logger.propagate = False
    return logger


def configure_logging_from_settings(
    settings: ValidatorSettings,
    *,
    stream: TextIO | None = None,
    json_lines: bool = True,
) -> logging.Logger:
    """Apply ``settings.log_level`` to the package logger."""

    return configure_logging(settings.log_level_number, stream=stream, json_lines=json_lines)


def reset_logging(logger_name: str = LOGGER_NAME) -> None:
    """Remove the handler installed by ``configure_logging`` and restore propagation."""

    logger = logging.getLogger(logger_name)
    with _HANDLER_LOCK:
        previous = _INSTALLED_HANDLERS.pop(logger_name, None)
    if previous is not None:
        logger.removeHandler(previous)
        previous.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def parse_log_level(value: int | str) -> int:
    if isinstance(value, bool):
        raise ValueError("level must be int or str, got bool")
    if isinstance(value, int):
        return value

    if not isinstance(value, str):
        raise ValueError(f"level must be int or str, got {type(value).__name__}")

    normalized = value.strip().upper()
    parsed = logging.getLevelName(normalized)
    if isinstance(parsed, int):
        return parsed

    raise ValueError(f"unsupported logging level {value!r}")


def _validate_logger_name(logger_name: str) -> str:
    if not isinstance(logger_name, str):
        raise ValueError(f"logger_name must be a string, got {type(logger_name).__name__}")
    normalized = logger_name.strip()
    if not normalized:
        raise ValueError("logger_name must not be empty")
    return normalized


def _iso8601z_from_epoch(epoch_seconds: float) -> str:
    timestamp = datetime.fromtimestamp(epoch_seconds, tz=UTC)
    return timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _extract_extra_fields(record: logging.LogRecord) -> dict[str, JSONValue]:
    fields: dict[str, JSONValue] = {}
    for key, value in record.__dict__.items():
        if key in _STANDARD_LOG_RECORD_FIELDS or key.startswith("_"):
            continue
        fields[key] = _normalize_json_value(value)
    return fields


def _normalize_json_value(value: object) -> JSONValue:
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else _NON_FINITE_VALUE
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, Mapping):
        return {str(key): _normalize_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_json_value(item) for item in value]
    if isinstance(value, (set, frozenset)):
        normalized_items = [_normalize_json_value(item) for item in value]
        return sorted(
            normalized_items,
            key=lambda item: json.dumps(
                item, sort_keys=True, separators=(",", ":"), ensure_ascii=False
            ),
        )
    return repr(value)


__all__ = [
    "JsonLineFormatter",
    "configure_logging",
    "configure_logging_from_settings",
    "parse_log_level",
    "reset_logging",
]
