"""Immutable JSON-like value model with structural equality."""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import ClassVar, TypeAlias

JSONScalar = str | int | float | bool | None
JSONValue = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]


class ValueKind(StrEnum):
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True, slots=True)
class NullValue:
    kind: ClassVar[ValueKind] = ValueKind.NULL


@dataclass(frozen=True, slots=True)
class BooleanValue:
    value: bool
    kind: ClassVar[ValueKind] = ValueKind.BOOLEAN

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError(f"BooleanValue expects bool, got {type(self.value).__name__}")


@dataclass(frozen=True, slots=True)
class IntegerValue:
    value: int
    kind: ClassVar[ValueKind] = ValueKind.INTEGER

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"IntegerValue expects int, got {type(self.value).__name__}")


@dataclass(frozen=True, slots=True)
class NumberValue:
    value: float
    kind: ClassVar[ValueKind] = ValueKind.NUMBER

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise TypeError(f"NumberValue expects float, got {type(self.value).__name__}")
        object.__setattr__(self, "value", float(self.value))


@dataclass(frozen=True, slots=True)
class StringValue:
    value: str
    kind: ClassVar[ValueKind] = ValueKind.STRING

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"StringValue expects str, got {type(self.value).__name__}")

    @property
    def utf8_length(self) -> int:
        return len(self.value.encode("utf-8", errors="surrogatepass"))


@dataclass(frozen=True, slots=True)
class ArrayValue:
    items: tuple[Value, ...] = ()
    kind: ClassVar[ValueKind] = ValueKind.ARRAY

    def __post_init__(self) -> None:
        if isinstance(self.items, (str, bytes)) or not isinstance(self.items, Sequence):
            raise TypeError(f"ArrayValue expects a sequence, got {type(self.items).__name__}")
        items = tuple(self.items)
        for index, item in enumerate(items):
            if not isinstance(item, VALUE_TYPES):
                raise TypeError(
                    f"ArrayValue item {index} must be a Value, got {type(item).__name__}"
                )
        object.__setattr__(self, "items", items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]


@dataclass(frozen=True, slots=True)
class ObjectValue:
    """String-keyed map of values; key order never affects equality or hashing."""

    properties: Mapping[str, Value] = field(default_factory=dict)
    kind: ClassVar[ValueKind] = ValueKind.OBJECT

    def __post_init__(self) -> None:
        if not isinstance(self.properties, Mapping):
            raise TypeError(
                f"ObjectValue expects a mapping, got {type(self.properties).__name__}"
            )
        for key in self.properties:
            if not isinstance(key, str):
                raise TypeError(f"ObjectValue keys must be str, got {type(key).__name__}")
        normalized: dict[str, Value] = {}
        for key in sorted(self.properties):
            item = self.properties[key]
            if not isinstance(item, VALUE_TYPES):
                raise TypeError(
                    f"ObjectValue property {key!r} must be a Value, got {type(item).__name__}"
                )
            normalized[key] = item
        object.__setattr__(self, "properties", MappingProxyType(normalized))

    def __hash__(self) -> int:
        return hash(tuple(self.properties.items()))

    def __len__(self) -> int:
        return len(self.properties)

    def __iter__(self) -> Iterator[str]:
        return iter(self.properties)

    def __contains__(self, key: object) -> bool:
        return key in self.properties

    def get(self, key: str) -> Value | None:
        return self.properties.get(key)

    def keys(self) -> tuple[str, ...]:
        return tuple(self.properties)

    def items(self) -> tuple[tuple[str, Value], ...]:
        return tuple(self.properties.items())


Value: TypeAlias = (
    NullValue | BooleanValue | IntegerValue | NumberValue | StringValue | ArrayValue | ObjectValue
)

VALUE_TYPES: tuple[type, ...] = (
    NullValue,
    BooleanValue,
    IntegerValue,
    NumberValue,
    StringValue,
    ArrayValue,
    ObjectValue,
)

NULL = NullValue()


def is_value(candidate: object) -> bool:
    return isinstance(candidate, VALUE_TYPES)


def value_from_python(data: object, path: str = "$") -> Value:
    """Convert Python-native JSON data into a ``Value`` tree.

    ``bool`` is checked before ``int`` so ``True`` never becomes an integer.
    Values that are already part of the model are returned unchanged.
    """

    if isinstance(data, VALUE_TYPES):
        return data
    if data is None:
        return NULL
    if isinstance(data, bool):
        return BooleanValue(data)
    if isinstance(data, int):
        return IntegerValue(data)
    if isinstance(data, float):
        return NumberValue(data)
    if isinstance(data, str):
        return StringValue(data)
    if isinstance(data, Mapping):
        properties: dict[str, Value] = {}
        for key, item in data.items():
            if not isinstance(key, str):
                raise TypeError(f"{path}: object keys must be str, got {type(key).__name__}")
            properties[key] = value_from_python(item, f"{path}.{key}")
        return ObjectValue(properties)
    if isinstance(data, (list, tuple)):
        return ArrayValue(
            tuple(value_from_python(item, f"{path}[{index}]") for index, item in enumerate(data))
        )
    raise TypeError(f"{path}: unsupported JSON value type {type(data).__name__}")


def value_to_python(value: Value) -> JSONValue:
    """Convert a ``Value`` tree back into plain Python JSON data."""

    match value:
        case NullValue():
            return None
        case BooleanValue(value=flag):
            return flag
        case IntegerValue(value=integer):
            return integer
        case NumberValue(value=number):
            return number
        case StringValue(value=text):
            return text
        case ArrayValue(items=items):
            return [value_to_python(item) for item in items]
        case ObjectValue(properties=properties):
            return {key: value_to_python(item) for key, item in properties.items()}
    raise TypeError(f"unsupported value type {type(value).__name__}")


def describe_value(value: Value) -> str:
    """Short, deterministic rendering used in failure messages."""

    match value:
        case NullValue():
            return "null"
        case BooleanValue(value=flag):
            return "true" if flag else "false"
        case IntegerValue(value=integer):
            return str(integer)
        case NumberValue(value=number):
            if math.isfinite(number) and number.is_integer():
                return f"{number:.1f}"
            return repr(number)
        case StringValue(value=text):
            return repr(text)
        case ArrayValue(items=items):
            return "[" + ", ".join(describe_value(item) for item in items) + "]"
        case ObjectValue(properties=properties):
            rendered = ", ".join(
                f"{key!r}: {describe_value(item)}" for key, item in properties.items()
            )
            return "{" + rendered + "}"
    raise TypeError(f"unsupported value type {type(value).__name__}")


__all__ = [
    "NULL",
    "VALUE_TYPES",
    "ArrayValue",
    "BooleanValue",
    "IntegerValue",
    "JSONScalar",
    "JSONValue",
    "NullValue",
    "NumberValue",
    "ObjectValue",
    "StringValue",
    "Value",
    "ValueKind",
    "describe_value",
    "is_value",
    "value_from_python",
    "value_to_python",
]
