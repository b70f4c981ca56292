"""Failure taxonomy, failure paths, and the aggregate ``ValidationError``."""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import ClassVar, TypeAlias

from schema_sentinel.constants import ROOT_PATH
from schema_sentinel.domain.schema import Schema, ValueType
from schema_sentinel.domain.values import JSONValue, Value, describe_value

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


# Path elements.


@dataclass(frozen=True, slots=True)
class ArrayIndex:
    index: int


@dataclass(frozen=True, slots=True)
class PropertyName:
    """The property name itself (checked by ``propertyNames``)."""

    property: str


@dataclass(frozen=True, slots=True)
class PropertyValue:
    """The value stored under a property."""

    property: str


@dataclass(frozen=True, slots=True)
class ThenBranch:
    pass


@dataclass(frozen=True, slots=True)
class ElseBranch:
    pass


@dataclass(frozen=True, slots=True)
class AllOfBranch:
    index: int


@dataclass(frozen=True, slots=True)
class AnyOfBranch:
    index: int


@dataclass(frozen=True, slots=True)
class OneOfBranch:
    index: int


PathElement: TypeAlias = (
    ArrayIndex
    | PropertyName
    | PropertyValue
    | ThenBranch
    | ElseBranch
    | AllOfBranch
    | AnyOfBranch
    | OneOfBranch
)
Path: TypeAlias = tuple[PathElement, ...]


def format_path(path: Sequence[PathElement]) -> str:
    """Render a failure path; the empty (root) path renders as ``$``."""

    parts = [ROOT_PATH]
    for element in path:
        match element:
            case ArrayIndex(index=index):
                parts.append(f"[{index}]")
            case PropertyValue(property=name):
                parts.append(_property_segment(name))
            case PropertyName(property=name):
                parts.append(_property_segment(name) + "#key")
            case ThenBranch():
                parts.append("/then")
            case ElseBranch():
                parts.append("/else")
            case AllOfBranch(index=index):
                parts.append(f"/allOf/{index}")
            case AnyOfBranch(index=index):
                parts.append(f"/anyOf/{index}")
            case OneOfBranch(index=index):
                parts.append(f"/oneOf/{index}")
    return "".join(parts)


def _property_segment(name: str) -> str:
    if _IDENTIFIER_RE.fullmatch(name):
        return f".{name}"
    return f"[{json.dumps(name, ensure_ascii=False)}]"


# Reasons.


@dataclass(frozen=True, slots=True)
class FalseSchema:
    code: ClassVar[str] = "false_schema"

    def describe(self) -> str:
        return "schema 'false' rejects every value"


@dataclass(frozen=True, slots=True)
class TypeMismatch:
    expected: ValueType
    code: ClassVar[str] = "type_mismatch"

    def describe(self) -> str:
        return f"expected type {self.expected.describe()}"


@dataclass(frozen=True, slots=True)
class ConstMismatch:
    expected: Value
    code: ClassVar[str] = "const_mismatch"

    def describe(self) -> str:
        return f"expected constant {describe_value(self.expected)}"


@dataclass(frozen=True, slots=True)
class EnumMismatch:
    expected: tuple[Value, ...]
    code: ClassVar[str] = "enum_mismatch"

    def describe(self) -> str:
        options = ", ".join(describe_value(item) for item in self.expected)
        return f"expected one of: {options}"


@dataclass(frozen=True, slots=True)
class MatchesNot:
    schema: Schema
    code: ClassVar[str] = "matches_not"

    def describe(self) -> str:
        return "value must not match the 'not' schema"


@dataclass(frozen=True, slots=True)
class AllOfMismatch:
    failures: tuple[Failure, ...]
    code: ClassVar[str] = "all_of_mismatch"

    def describe(self) -> str:
        return f"value does not match every allOf schema ({len(self.failures)} failure(s))"


@dataclass(frozen=True, slots=True)
class AnyOfMismatch:
    failures: tuple[Failure, ...]
    code: ClassVar[str] = "any_of_mismatch"

    def describe(self) -> str:
        return f"value matches no anyOf schema ({len(self.failures)} failure(s))"


@dataclass(frozen=True, slots=True)
class OneOfMismatch:
    failures: tuple[Failure, ...]
    code: ClassVar[str] = "one_of_mismatch"

    def describe(self) -> str:
        return f"value must match exactly one oneOf schema ({len(self.failures)} failure(s))"


@dataclass(frozen=True, slots=True)
class NotMultipleOf:
    """``multiple_of`` is an ``int`` for integer constraints, a ``float`` for number ones."""

    multiple_of: int | float
    code: ClassVar[str] = "not_multiple_of"

    def describe(self) -> str:
        return f"value is not a multiple of {self.multiple_of!r}"


@dataclass(frozen=True, slots=True)
class BelowMinimum:
    inclusive: bool
    minimum: int | float
    code: ClassVar[str] = "below_minimum"

    def describe(self) -> str:
        relation = ">=" if self.inclusive else ">"
        return f"value must be {relation} {self.minimum!r}"


@dataclass(frozen=True, slots=True)
class AboveMaximum:
    inclusive: bool
    maximum: int | float
    code: ClassVar[str] = "above_maximum"

    def describe(self) -> str:
        relation = "<=" if self.inclusive else "<"
        return f"value must be {relation} {self.maximum!r}"


@dataclass(frozen=True, slots=True)
class StringLengthTooShort:
    minimum: int
    code: ClassVar[str] = "string_length_too_short"

    def describe(self) -> str:
        return f"string must be at least {self.minimum} UTF-8 byte(s)"


@dataclass(frozen=True, slots=True)
class StringLengthTooLong:
    maximum: int
    code: ClassVar[str] = "string_length_too_long"

    def describe(self) -> str:
        return f"string must be at most {self.maximum} UTF-8 byte(s)"


@dataclass(frozen=True, slots=True)
class StringPatternMismatch:
    pattern: str
    code: ClassVar[str] = "string_pattern_mismatch"

    def describe(self) -> str:
        return f"string does not match pattern {self.pattern!r}"


@dataclass(frozen=True, slots=True)
class ArrayLengthTooShort:
    minimum: int
    code: ClassVar[str] = "array_length_too_short"

    def describe(self) -> str:
        return f"array must have at least {self.minimum} item(s)"


@dataclass(frozen=True, slots=True)
class ArrayLengthTooLong:
    maximum: int
    code: ClassVar[str] = "array_length_too_long"

    def describe(self) -> str:
        return f"array must have at most {self.maximum} item(s)"


@dataclass(frozen=True, slots=True)
class ArrayContainsMismatch:
    schema: Schema
    failures: tuple[Failure, ...]
    code: ClassVar[str] = "array_contains_mismatch"

    def describe(self) -> str:
        return "no array item matches the 'contains' schema"


@dataclass(frozen=True, slots=True)
class ArrayItemsNotUnique:
    code: ClassVar[str] = "array_items_not_unique"

    def describe(self) -> str:
        return "array items must be unique"


@dataclass(frozen=True, slots=True)
class ObjectPropertiesTooShort:
    minimum: int
    code: ClassVar[str] = "object_properties_too_short"

    def describe(self) -> str:
        return f"object must have at least {self.minimum} property(ies)"


@dataclass(frozen=True, slots=True)
class ObjectPropertiesTooLong:
    maximum: int
    code: ClassVar[str] = "object_properties_too_long"

    def describe(self) -> str:
        return f"object must have at most {self.maximum} property(ies)"


@dataclass(frozen=True, slots=True)
class ObjectMissingRequiredProperties:
    required: tuple[str, ...]
    missing: tuple[str, ...]
    code: ClassVar[str] = "object_missing_required_properties"

    def describe(self) -> str:
        return f"missing required properties: {list(self.missing)}"


@dataclass(frozen=True, slots=True)
class PatternCompilationError:
    pattern: str
    message: str = ""
    code: ClassVar[str] = "pattern_compilation_error"

    def describe(self) -> str:
        suffix = f": {self.message}" if self.message else ""
        return f"pattern {self.pattern!r} failed to compile{suffix}"


Reason: TypeAlias = (
    FalseSchema
    | TypeMismatch
    | ConstMismatch
    | EnumMismatch
    | MatchesNot
    | AllOfMismatch
    | AnyOfMismatch
    | OneOfMismatch
    | NotMultipleOf
    | BelowMinimum
    | AboveMaximum
    | StringLengthTooShort
    | StringLengthTooLong
    | StringPatternMismatch
    | ArrayLengthTooShort
    | ArrayLengthTooLong
    | ArrayContainsMismatch
    | ArrayItemsNotUnique
    | ObjectPropertiesTooShort
    | ObjectPropertiesTooLong
    | ObjectMissingRequiredProperties
    | PatternCompilationError
)

_NESTED_REASONS = (AllOfMismatch, AnyOfMismatch, OneOfMismatch, ArrayContainsMismatch)


@dataclass(frozen=True, slots=True)
class Failure:
    """One validation failure and the path at which it occurred."""

    path: Path
    reason: Reason

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", tuple(self.path))

    @property
    def code(self) -> str:
        return self.reason.code

    def describe(self) -> str:
        return f"{format_path(self.path)}: {self.reason.describe()}"

    def to_dict(self) -> dict[str, JSONValue]:
        payload: dict[str, JSONValue] = {
            "path": format_path(self.path),
            "code": self.reason.code,
            "message": self.reason.describe(),
        }
        if isinstance(self.reason, _NESTED_REASONS):
            payload["failures"] = [item.to_dict() for item in self.reason.failures]
        return payload


class ValidationError(ValueError):
    """Raised when a value does not satisfy a schema; carries every failure found."""

    def __init__(self, failures: Iterable[Failure]) -> None:
        self.failures = tuple(failures)
        if not self.failures:
            raise ValueError("ValidationError requires at least one failure")
        rendered = "\n".join(f"- {item.describe()}" for item in self.failures)
        super().__init__(f"value failed schema validation:\n{rendered}")

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(item.code for item in self.failures)

    def to_dict(self) -> dict[str, JSONValue]:
        return {
            "failure_count": len(self.failures),
            "failures": [item.to_dict() for item in self.failures],
        }


__all__ = [
    "AboveMaximum",
    "AllOfBranch",
    "AllOfMismatch",
    "AnyOfBranch",
    "AnyOfMismatch",
    "ArrayContainsMismatch",
    "ArrayIndex",
    "ArrayItemsNotUnique",
    "ArrayLengthTooLong",
    "ArrayLengthTooShort",
    "BelowMinimum",
    "ConstMismatch",
    "ElseBranch",
    "EnumMismatch",
    "Failure",
    "FalseSchema",
    "MatchesNot",
    "NotMultipleOf",
    "ObjectMissingRequiredProperties",
    "ObjectPropertiesTooLong",
    "ObjectPropertiesTooShort",
    "PropertyName",
    "PropertyValue",
    "OneOfBranch",
    "OneOfMismatch",
    "Path",
    "PathElement",
    "PatternCompilationError",
    "Reason",
    "StringLengthTooLong",
    "StringLengthTooShort",
    "StringPatternMismatch",
    "ThenBranch",
    "TypeMismatch",
    "ValidationError",
    "format_path",
]
