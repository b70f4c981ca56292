"""
schema-sentinel unit tests for JSON-lines logging.

Purpose
- Validate the opt-in formatter and handler setup used for validator and config log events.

What this test file should cover
- JSON line shape: timestamp, level, logger, message, extra fields, exceptions.
- Reconfiguration replaces the previous handler instead of duplicating output.
- Level parsing.
"""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Iterator
from uuid import uuid4

import pytest

from schema_sentinel.config.settings import ValidatorSettings
from schema_sentinel.domain.builders import string_schema
from schema_sentinel.observability.logging import (
    configure_logging,
    configure_logging_from_settings,
    parse_log_level,
    reset_logging,
)
from schema_sentinel.validation.regex_cache import RegexCache
from schema_sentinel.validation.validator import Validator


@pytest.fixture
def logger_name() -> Iterator[str]:
    name = f"schema_sentinel.tests.logging.{uuid4().hex}"
    yield name
    reset_logging(name)


def _read_json_lines(stream: io.StringIO) -> list[dict[str, object]]:
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def test_json_lines_carry_extra_fields(logger_name: str) -> None:
    stream = io.StringIO()
    logger = configure_logging("DEBUG", stream=stream, logger_name=logger_name)

    logger.info("pattern compiled", extra={"pattern": "^a", "codes": ("x", "y")})

    (event,) = _read_json_lines(stream)
    assert event["level"] == "INFO"
    assert event["logger"] == logger_name
    assert event["message"] == "pattern compiled"
    assert event["fields"] == {"pattern": "^a", "codes": ["x", "y"]}
    assert isinstance(event["timestamp"], str)
    assert event["timestamp"].endswith("Z")


def test_exceptions_and_non_finite_values_are_serializable(logger_name: str) -> None:
    stream = io.StringIO()
    logger = configure_logging(stream=stream, logger_name=logger_name)

    try:
        raise ValueError("boom")
    except ValueError:
        logger.exception("failed", extra={"ratio": float("inf")})

    (event,) = _read_json_lines(stream)
    assert "ValueError: boom" in str(event["exception"])
    assert event["fields"] == {"ratio": "non-finite"}


def test_reconfiguring_replaces_the_handler(logger_name: str) -> None:
    first = io.StringIO()
    second = io.StringIO()
    configure_logging(stream=first, logger_name=logger_name)
    logger = configure_logging(stream=second, logger_name=logger_name)

    logger.warning("only once")

    assert first.getvalue() == ""
    assert len(_read_json_lines(second)) == 1
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_level_filters_records(logger_name: str) -> None:
    stream = io.StringIO()
    logger = configure_logging("WARNING", stream=stream, logger_name=logger_name)

    logger.info("hidden")
    logger.error("shown")

    assert [event["message"] for event in _read_json_lines(stream)] == ["shown"]


def test_plain_text_mode(logger_name: str) -> None:
    stream = io.StringIO()
    logger = configure_logging(stream=stream, json_lines=False, logger_name=logger_name)

    logger.warning("plain")

    assert stream.getvalue().rstrip().endswith(f"WARNING {logger_name}: plain")


def test_reset_restores_propagation(logger_name: str) -> None:
    logger = configure_logging(stream=io.StringIO(), logger_name=logger_name)

    reset_logging(logger_name)

    assert logger.handlers == []
    assert logger.propagate is True
    assert logger.level == logging.NOTSET


def test_validator_events_reach_the_package_logger() -> None:
    stream = io.StringIO()
    configure_logging("DEBUG", stream=stream)
    try:
        Validator(RegexCache()).collect_failures("x", string_schema(pattern="("))
    finally:
        reset_logging()

    events = _read_json_lines(stream)
    failed = [event for event in events if event["message"] == "regex compile failed"]
    assert len(failed) == 1
    assert failed[0]["logger"] == "schema_sentinel.validation.regex_cache"
    assert failed[0]["fields"]["pattern"] == "("  # type: ignore[index]


@pytest.mark.parametrize(
    ("value", "expected"),
    [("debug", logging.DEBUG), (" Warning ", logging.WARNING), (15, 15)],
)
def test_parse_log_level(value: int | str, expected: int) -> None:
    assert parse_log_level(value) == expected


@pytest.mark.parametrize("value", ["LOUD", True, 1.5])
def test_parse_log_level_rejects_unknown_values(value: object) -> None:
    with pytest.raises(ValueError):
        parse_log_level(value)  # type: ignore[arg-type]


def test_configure_logging_rejects_blank_logger_name() -> None:
    with pytest.raises(ValueError, match="logger_name"):
        configure_logging(logger_name="  ")


def test_settings_log_level_drives_the_package_logger() -> None:
    stream = io.StringIO()
    logger = configure_logging_from_settings(ValidatorSettings(log_level="ERROR"), stream=stream)
    try:
        logger.warning("hidden")
        logger.error("shown")
    finally:
        reset_logging()

    assert logger.name == "schema_sentinel"
    assert [event["message"] for event in _read_json_lines(stream)] == ["shown"]
