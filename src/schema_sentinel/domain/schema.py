"""Schema model: boolean schemas, object schemas, and per-kind constraint blocks."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import TypeAlias

from schema_sentinel.domain.values import (
    IntegerValue,
    Value,
    ValueKind,
    value_from_python,
)

# Canonical kind ordering for rendering and builders.
KIND_ORDER: tuple[ValueKind, ...] = (
    ValueKind.NULL,
    ValueKind.BOOLEAN,
    ValueKind.INTEGER,
    ValueKind.NUMBER,
    ValueKind.STRING,
    ValueKind.ARRAY,
    ValueKind.OBJECT,
)

_BOUND_FIELDS = ("multiple_of", "minimum", "maximum", "exclusive_minimum", "exclusive_maximum")


@dataclass(frozen=True, slots=True)
class ValueType:
    """The ``type`` keyword: one or more accepted value kinds."""

    kinds: frozenset[ValueKind]

    def __post_init__(self) -> None:
        raw = self.kinds
        if isinstance(raw, (str, ValueKind)):
            raw = (raw,)
        kinds = frozenset(_as_kind(item) for item in raw)
        if not kinds:
            raise ValueError("ValueType requires at least one kind")
        object.__setattr__(self, "kinds", kinds)

    @classmethod
    def of(cls, *kinds: ValueKind | str) -> ValueType:
        return cls(frozenset(_as_kind(item) for item in kinds))

    def __contains__(self, kind: object) -> bool:
        return kind in self.kinds

    def __iter__(self) -> Iterator[ValueKind]:
        return iter(kind for kind in KIND_ORDER if kind in self.kinds)

    def is_compatible(self, value: Value) -> bool:
        if value.kind in self.kinds:
            return True
        return isinstance(value, IntegerValue) and ValueKind.NUMBER in self.kinds

    def describe(self) -> str:
        names = [kind.value for kind in self]
        if len(names) == 1:
            return names[0]
        return "[" + ", ".join(names) + "]"


@dataclass(frozen=True, slots=True)
class BooleanSchema:
    """``true`` accepts every value; ``false`` rejects every value."""

    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError(f"BooleanSchema expects bool, got {type(self.value).__name__}")


TRUE_SCHEMA = BooleanSchema(True)
FALSE_SCHEMA = BooleanSchema(False)


@dataclass(frozen=True, slots=True)
class IntegerConstraints:
    multiple_of: int | None = None
    minimum: int | None = None
    maximum: int | None = None
    exclusive_minimum: int | None = None
    exclusive_maximum: int | None = None

    def __post_init__(self) -> None:
        for name in _BOUND_FIELDS:
            bound = getattr(self, name)
            if bound is not None and (isinstance(bound, bool) or not isinstance(bound, int)):
                raise TypeError(f"{name} must be an int, got {type(bound).__name__}")


@dataclass(frozen=True, slots=True)
class NumberConstraints:
    multiple_of: float | None = None
    minimum: float | None = None
    maximum: float | None = None
    exclusive_minimum: float | None = None
    exclusive_maximum: float | None = None

    def __post_init__(self) -> None:
        for name in _BOUND_FIELDS:
            bound = getattr(self, name)
            if bound is None:
                continue
            if isinstance(bound, bool) or not isinstance(bound, (int, float)):
                raise TypeError(f"{name} must be a number, got {type(bound).__name__}")
            try:
                converted = float(bound)
            except OverflowError:
                raise ValueError(f"{name} is out of float range") from None
            if math.isnan(converted):
                raise ValueError(f"{name} must not be NaN")
            object.__setattr__(self, name, converted)


@dataclass(frozen=True, slots=True)
class StringConstraints:
    """String constraints; lengths count UTF-8 bytes."""

    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None

    def __post_init__(self) -> None:
        _check_count("min_length", self.min_length)
        _check_count("max_length", self.max_length)
        if self.pattern is not None and not isinstance(self.pattern, str):
            raise TypeError(f"pattern must be a str, got {type(self.pattern).__name__}")


@dataclass(frozen=True, slots=True)
class ItemsForAll:
    """One schema applied to every array element."""

    schema: Schema

    def __post_init__(self) -> None:
        object.__setattr__(self, "schema", as_schema(self.schema, "items"))


@dataclass(frozen=True, slots=True)
class PositionalItems:
    """Per-index schemas; elements past the end fall back to ``additional_items``."""

    schemas: tuple[Schema, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "schemas", _as_schema_tuple(self.schemas, "items"))


Items: TypeAlias = ItemsForAll | PositionalItems


@dataclass(frozen=True, slots=True)
class ArrayConstraints:
    items: Items | None = None
    additional_items: Schema | None = None
    min_items: int | None = None
    max_items: int | None = None
    unique_items: bool | None = None
    contains: Schema | None = None

    def __post_init__(self) -> None:
        _check_count("min_items", self.min_items)
        _check_count("max_items", self.max_items)
        if self.items is not None:
            object.__setattr__(self, "items", _as_items(self.items))
        if self.additional_items is not None:
            object.__setattr__(
                self, "additional_items", as_schema(self.additional_items, "additional_items")
            )
        if self.contains is not None:
            object.__setattr__(self, "contains", as_schema(self.contains, "contains"))

    def item_schemas(self, count: int) -> Iterator[Schema | None]:
        """Yield the effective schema for each of ``count`` array indexes."""

        match self.items:
            case None:
                for _ in range(count):
                    yield None
            case ItemsForAll(schema=schema):
                for _ in range(count):
                    yield schema
            case PositionalItems(schemas=schemas):
                for index in range(count):
                    yield schemas[index] if index < len(schemas) else self.additional_items


@dataclass(frozen=True, slots=True)
class ObjectConstraints:
    properties: Mapping[str, Schema] | None = None
    pattern_properties: Mapping[str, Schema] | None = None
    additional_properties: Schema | None = None
    required: tuple[str, ...] | None = None
    min_properties: int | None = None
    max_properties: int | None = None
    property_names: Schema | None = None

    def __post_init__(self) -> None:
        _check_count("min_properties", self.min_properties)
        _check_count("max_properties", self.max_properties)
        if self.properties is not None:
            object.__setattr__(
                self, "properties", _as_schema_mapping(self.properties, "properties")
            )
        if self.pattern_properties is not None:
            object.__setattr__(
                self,
                "pattern_properties",
                _as_schema_mapping(self.pattern_properties, "pattern_properties"),
            )
        if self.additional_properties is not None:
            object.__setattr__(
                self,
                "additional_properties",
                as_schema(self.additional_properties, "additional_properties"),
            )
        if self.property_names is not None:
            object.__setattr__(
                self, "property_names", as_schema(self.property_names, "property_names")
            )
        if self.required is not None:
            if isinstance(self.required, str):
                raise TypeError("required must be a sequence of property names, not a str")
            names = tuple(self.required)
            for name in names:
                if not isinstance(name, str):
                    raise TypeError(f"required entries must be str, got {type(name).__name__}")
            object.__setattr__(self, "required", names)

    def __hash__(self) -> int:
        return hash(
            (
                _mapping_key(self.properties),
                _mapping_key(self.pattern_properties),
                self.additional_properties,
                self.required,
                self.min_properties,
                self.max_properties,
                self.property_names,
            )
        )

    def schema_for_property(self, name: str) -> Schema | None:
        if self.properties is not None and name in self.properties:
            return self.properties[name]
        return self.additional_properties


@dataclass(frozen=True, slots=True)
class ValueSchema:
    """Kind-specific constraint blocks; only the block matching a value's kind applies."""

    integer: IntegerConstraints | None = None
    number: NumberConstraints | None = None
    string: StringConstraints | None = None
    array: ArrayConstraints | None = None
    object: ObjectConstraints | None = None

    def value_types(self) -> tuple[ValueKind, ...]:
        present = {
            ValueKind.INTEGER: self.integer,
            ValueKind.NUMBER: self.number,
            ValueKind.STRING: self.string,
            ValueKind.ARRAY: self.array,
            ValueKind.OBJECT: self.object,
        }
        return tuple(kind for kind in KIND_ORDER if present.get(kind) is not None)


@dataclass(frozen=True, slots=True)
class ObjectSchema:
    """An object schema carrying every supported keyword.

    ``const``/``enum``/``default``/``examples`` accept ``Value`` instances or
    plain Python JSON data. Use ``NULL`` for a ``null`` const; ``None`` means
    the keyword is absent. Annotation fields never affect validation.
    """

    type: ValueType | None = None
    const: Value | None = None
    enum: tuple[Value, ...] | None = None
    not_: Schema | None = None
    all_of: tuple[Schema, ...] | None = None
    any_of: tuple[Schema, ...] | None = None
    one_of: tuple[Schema, ...] | None = None
    if_: Schema | None = None
    then: Schema | None = None
    else_: Schema | None = None
    value_schema: ValueSchema | None = None
    title: str | None = None
    description: str | None = None
    default: Value | None = None
    examples: tuple[Value, ...] | None = None
    read_only: bool | None = None
    write_only: bool | None = None
    format: str | None = None

    def __post_init__(self) -> None:
        if self.type is not None and not isinstance(self.type, ValueType):
            object.__setattr__(self, "type", ValueType(self.type))
        if self.const is not None:
            object.__setattr__(self, "const", value_from_python(self.const, "const"))
        if self.default is not None:
            object.__setattr__(self, "default", value_from_python(self.default, "default"))
        if self.enum is not None:
            object.__setattr__(self, "enum", _as_value_tuple(self.enum, "enum"))
        if self.examples is not None:
            object.__setattr__(self, "examples", _as_value_tuple(self.examples, "examples"))
        for name in ("not_", "if_", "then", "else_"):
            candidate = getattr(self, name)
            if candidate is not None:
                object.__setattr__(self, name, as_schema(candidate, name))
        for name in ("all_of", "any_of", "one_of"):
            candidates = getattr(self, name)
            if candidates is not None:
                object.__setattr__(self, name, _as_schema_tuple(candidates, name))
        if self.value_schema is not None and not isinstance(self.value_schema, ValueSchema):
            raise TypeError(
                f"value_schema must be a ValueSchema, got {type(self.value_schema).__name__}"
            )

    @property
    def integer(self) -> IntegerConstraints | None:
        return None if self.value_schema is None else self.value_schema.integer

    @property
    def number(self) -> NumberConstraints | None:
        return None if self.value_schema is None else self.value_schema.number

    @property
    def string(self) -> StringConstraints | None:
        return None if self.value_schema is None else self.value_schema.string

    @property
    def array(self) -> ArrayConstraints | None:
        return None if self.value_schema is None else self.value_schema.array

    @property
    def object(self) -> ObjectConstraints | None:
        return None if self.value_schema is None else self.value_schema.object


Schema: TypeAlias = BooleanSchema | ObjectSchema

SCHEMA_TYPES: tuple[type, ...] = (BooleanSchema, ObjectSchema)


def as_schema(candidate: object, path: str = "schema") -> Schema:
    """Accept a schema instance or a bare ``bool`` shorthand."""

    if isinstance(candidate, SCHEMA_TYPES):
        return candidate
    if isinstance(candidate, bool):
        return TRUE_SCHEMA if candidate else FALSE_SCHEMA
    raise TypeError(f"{path}: expected a schema, got {type(candidate).__name__}")


def _as_kind(candidate: object) -> ValueKind:
    if isinstance(candidate, ValueKind):
        return candidate
    if isinstance(candidate, str):
        try:
            return ValueKind(candidate)
        except ValueError:
            allowed = ", ".join(kind.value for kind in KIND_ORDER)
            raise ValueError(
                f"invalid type {candidate!r}; expected one of: {allowed}"
            ) from None
    raise TypeError(f"expected a value kind, got {type(candidate).__name__}")


def _as_items(candidate: object) -> Items:
    if isinstance(candidate, (ItemsForAll, PositionalItems)):
        return candidate
    if isinstance(candidate, (list, tuple)):
        return PositionalItems(tuple(candidate))
    return ItemsForAll(as_schema(candidate, "items"))


def _as_schema_tuple(candidates: object, path: str) -> tuple[Schema, ...]:
    if isinstance(candidates, (str, bytes)) or not isinstance(candidates, Iterable):
        raise TypeError(f"{path}: expected a sequence of schemas, got {type(candidates).__name__}")
    return tuple(as_schema(item, f"{path}[{index}]") for index, item in enumerate(candidates))


def _as_schema_mapping(candidates: object, path: str) -> Mapping[str, Schema]:
    if not isinstance(candidates, Mapping):
        raise TypeError(f"{path}: expected a mapping, got {type(candidates).__name__}")
    parsed: dict[str, Schema] = {}
    for key, item in candidates.items():
        if not isinstance(key, str):
            raise TypeError(f"{path}: keys must be str, got {type(key).__name__}")
        parsed[key] = as_schema(item, f"{path}.{key}")
    return MappingProxyType(parsed)


def _mapping_key(mapping: Mapping[str, Schema] | None) -> tuple[tuple[str, Schema], ...] | None:
    if mapping is None:
        return None
    return tuple(sorted(mapping.items(), key=lambda item: item[0]))


def _as_value_tuple(candidates: object, path: str) -> tuple[Value, ...]:
    if isinstance(candidates, (str, bytes)) or not isinstance(candidates, Sequence):
        raise TypeError(f"{path}: expected a sequence, got {type(candidates).__name__}")
    return tuple(
        value_from_python(item, f"{path}[{index}]") for index, item in enumerate(candidates)
    )


def _check_count(name: str, count: object) -> None:
    if count is None:
        return
    if isinstance(count, bool) or not isinstance(count, int):
        raise TypeError(f"{name} must be an int, got {type(count).__name__}")
    if count < 0:
        raise ValueError(f"{name} must be >= 0")


__all__ = [
    "FALSE_SCHEMA",
    "KIND_ORDER",
    "SCHEMA_TYPES",
    "TRUE_SCHEMA",
    "ArrayConstraints",
    "BooleanSchema",
    "IntegerConstraints",
    "Items",
    "ItemsForAll",
    "NumberConstraints",
    "ObjectConstraints",
    "ObjectSchema",
    "PositionalItems",
    "Schema",
    "StringConstraints",
    "ValueSchema",
    "ValueType",
    "as_schema",
]
