"""
schema-sentinel unit tests for failure paths, reasons, and reports.

Purpose
- Validate path rendering, reason codes and messages, and the JSON-compatible report shape.
"""

from __future__ import annotations

import json

import pytest

from schema_sentinel.domain.builders import object_schema, string_schema
from schema_sentinel.domain.schema import FALSE_SCHEMA, ValueType
from schema_sentinel.domain.values import IntegerValue, StringValue
from schema_sentinel.validation.errors import (
    AboveMaximum,
    AllOfBranch,
    AllOfMismatch,
    AnyOfBranch,
    ArrayContainsMismatch,
    ArrayIndex,
    BelowMinimum,
    ElseBranch,
    EnumMismatch,
    Failure,
    FalseSchema,
    MatchesNot,
    ObjectMissingRequiredProperties,
    OneOfBranch,
    PatternCompilationError,
    PropertyName,
    PropertyValue,
    ThenBranch,
    TypeMismatch,
    ValidationError,
    format_path,
)


@pytest.mark.parametrize(
    ("path", "rendered"),
    [
        ((), "$"),
        ((ArrayIndex(0),), "$[0]"),
        ((PropertyValue("name"),), "$.name"),
        ((PropertyValue("first name"),), '$["first name"]'),
        ((PropertyValue("9lives"),), '$["9lives"]'),
        ((PropertyName("name"),), "$.name#key"),
        ((PropertyValue("items"), ArrayIndex(2), ThenBranch()), "$.items[2]/then"),
        (
            (ElseBranch(), AllOfBranch(1), AnyOfBranch(0), OneOfBranch(3)),
            "$/else/allOf/1/anyOf/0/oneOf/3",
        ),
    ],
)
def test_format_path(path: tuple[object, ...], rendered: str) -> None:
    assert format_path(path) == rendered  # type: ignore[arg-type]


def test_every_reason_has_a_stable_code_and_message() -> None:
    reasons = [
        (FalseSchema(), "false_schema", "schema 'false' rejects every value"),
        (
            TypeMismatch(expected=ValueType.of("string", "null")),
            "type_mismatch",
            "expected type [null, string]",
        ),
        (
            EnumMismatch(expected=(StringValue("a"), IntegerValue(1))),
            "enum_mismatch",
            "expected one of: 'a', 1",
        ),
        (BelowMinimum(inclusive=False, minimum=3), "below_minimum", "value must be > 3"),
        (AboveMaximum(inclusive=True, maximum=2.5), "above_maximum", "value must be <= 2.5"),
        (
            ObjectMissingRequiredProperties(required=("a", "b"), missing=("b",)),
            "object_missing_required_properties",
            "missing required properties: ['b']",
        ),
        (
            PatternCompilationError(pattern="("),
            "pattern_compilation_error",
            "pattern '(' failed to compile",
        ),
    ]

    for reason, code, message in reasons:
        assert reason.code == code
        assert reason.describe() == message


def test_failure_path_is_normalized_to_a_tuple() -> None:
    failure = Failure(path=[ArrayIndex(0)], reason=FalseSchema())  # type: ignore[arg-type]

    assert failure.path == (ArrayIndex(0),)
    assert failure.code == "false_schema"
    assert failure.describe() == "$[0]: schema 'false' rejects every value"


def test_to_dict_nests_combinator_failures() -> None:
    inner = Failure(path=(AllOfBranch(0),), reason=FalseSchema())
    outer = Failure(path=(PropertyValue("a"),), reason=AllOfMismatch(failures=(inner,)))

    assert outer.to_dict() == {
        "path": "$.a",
        "code": "all_of_mismatch",
        "message": "value does not match every allOf schema (1 failure(s))",
        "failures": [
            {
                "path": "$/allOf/0",
                "code": "false_schema",
                "message": "schema 'false' rejects every value",
            }
        ],
    }


def test_contains_report_includes_item_failures() -> None:
    reason = ArrayContainsMismatch(
        schema=FALSE_SCHEMA,
        failures=(Failure(path=(ArrayIndex(0),), reason=FalseSchema()),),
    )

    payload = Failure(path=(), reason=reason).to_dict()

    assert payload["code"] == "array_contains_mismatch"
    assert payload["failures"] == [
        {"path": "$[0]", "code": "false_schema", "message": "schema 'false' rejects every value"}
    ]


def test_failures_holding_object_schemas_are_hashable() -> None:
    schema = object_schema(properties={"a": True, "b": string_schema()})
    negated = Failure(path=(PropertyValue("a"),), reason=MatchesNot(schema=schema))
    same = Failure(
        path=(PropertyValue("a"),),
        reason=MatchesNot(schema=object_schema(properties={"b": string_schema(), "a": True})),
    )
    contains = Failure(path=(), reason=ArrayContainsMismatch(schema=schema, failures=(negated,)))

    assert negated == same
    assert hash(negated) == hash(same)
    assert len({negated, same, contains}) == 2


def test_validation_error_renders_one_line_per_failure() -> None:
    error = ValidationError(
        [
            Failure(path=(), reason=FalseSchema()),
            Failure(path=(PropertyValue("n"),), reason=BelowMinimum(inclusive=True, minimum=0)),
        ]
    )

    assert str(error) == (
        "value failed schema validation:\n"
        "- $: schema 'false' rejects every value\n"
        "- $.n: value must be >= 0"
    )
    assert error.codes == ("false_schema", "below_minimum")
    payload = error.to_dict()
    assert payload["failure_count"] == 2
    json.dumps(payload)


def test_validation_error_requires_failures() -> None:
    with pytest.raises(ValueError, match="at least one failure"):
        ValidationError([])
