"""
schema-sentinel end-to-end smoke tests.

Purpose
- Exercise the public package surface the way an application would: load settings,
  build schemas, validate payloads, and report failures.
"""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

import schema_sentinel
from schema_sentinel import (
    NULL,
    ObjectSchema,
    ValidationError,
    Validator,
    array_schema,
    configure_logging_from_settings,
    integer_schema,
    load_settings,
    number_schema,
    object_schema,
    string_schema,
    union_schema,
    value_from_python,
)
from schema_sentinel.observability.logging import reset_logging

pytestmark = pytest.mark.smoke


def _tool_call_schema() -> ObjectSchema:
    return object_schema(
        properties={
            "location": string_schema(min_length=1),
            "days": integer_schema(minimum=1, maximum=14),
            "units": ObjectSchema(enum=["metric", "imperial"]),
            "tags": array_schema(items=string_schema(pattern="^[a-z-]+$"), unique_items=True),
            "threshold": union_schema(
                number=number_schema().number, null=True, description="optional cutoff"
            ),
        },
        required=["location", "days"],
        additional_properties=False,
        title="weather lookup",
    )


def test_package_exports_are_importable() -> None:
    assert schema_sentinel.__version__
    for name in schema_sentinel.__all__:
        assert hasattr(schema_sentinel, name), name


def test_settings_driven_validation_round_trip(tmp_path: Path) -> None:
    config_path = tmp_path / "schema_sentinel.toml"
    config_path.write_text(
        "[schema_sentinel]\n"
        "regex_cache_max_entries = 8\n"
        "log_failures = true\n"
        "log_level = 'debug'\n",
        encoding="utf-8",
    )
    settings = load_settings(config_path, environ={})
    stream = io.StringIO()
    configure_logging_from_settings(settings, stream=stream)
    try:
        validator = Validator.from_settings(settings)
        schema = _tool_call_schema()

        valid = {"location": "Oslo", "days": 3, "units": "metric", "tags": ["snow"]}
        validator.validate({**valid, "threshold": None}, schema)
        with pytest.raises(ValidationError) as exc_info:
            validator.validate(
                {"location": "", "days": 30, "tags": ["Snow", "Snow"], "wind": True},
                schema,
            )
    finally:
        reset_logging()

    report = exc_info.value.to_dict()
    failures = report["failures"]
    assert isinstance(failures, list)
    assert [item["path"] for item in failures] == [  # type: ignore[call-overload, index]
        "$.days",
        "$.location",
        "$.tags",
        "$.tags[0]",
        "$.tags[1]",
        "$.wind",
    ]
    assert exc_info.value.codes == (
        "above_maximum",
        "string_length_too_short",
        "array_items_not_unique",
        "string_pattern_mismatch",
        "string_pattern_mismatch",
        "false_schema",
    )
    json.dumps(report)

    events = [json.loads(line) for line in stream.getvalue().splitlines()]
    messages = [event["message"] for event in events]
    assert "regex compiled" in messages
    assert "validation failed" in messages
    assert validator.regex_cache.max_entries == 8


def test_value_trees_and_native_data_validate_identically() -> None:
    schema = _tool_call_schema()
    payload = {"location": "Lima", "days": 2, "threshold": 0.5}

    assert schema_sentinel.is_valid(payload, schema)
    assert schema_sentinel.is_valid(value_from_python(payload), schema)
    assert not schema_sentinel.is_valid(NULL, schema)
