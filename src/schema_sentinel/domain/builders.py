"""Typed schema builders that pair a ``type`` keyword with its constraint block."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from schema_sentinel.domain.schema import (
    ArrayConstraints,
    IntegerConstraints,
    Items,
    NumberConstraints,
    ObjectConstraints,
    ObjectSchema,
    Schema,
    StringConstraints,
    ValueSchema,
    ValueType,
)
from schema_sentinel.domain.values import ValueKind

# Keywords shared by every builder (title, description, default, examples,
# read_only, write_only, enum, const, all_of, any_of, one_of, not_, if_, then,
# else_, format) are forwarded to ``ObjectSchema``.
SchemaKeywords = Any


def string_schema(
    *,
    min_length: int | None = None,
    max_length: int | None = None,
    pattern: str | None = None,
    **keywords: SchemaKeywords,
) -> ObjectSchema:
    return _typed(
        ValueSchema(
            string=StringConstraints(min_length=min_length, max_length=max_length, pattern=pattern)
        ),
        (ValueKind.STRING,),
        keywords,
    )


def integer_schema(
    *,
    multiple_of: int | None = None,
    minimum: int | None = None,
    maximum: int | None = None,
    exclusive_minimum: int | None = None,
    exclusive_maximum: int | None = None,
    **keywords: SchemaKeywords,
) -> ObjectSchema:
    return _typed(
        ValueSchema(
            integer=IntegerConstraints(
                multiple_of=multiple_of,
                minimum=minimum,
                maximum=maximum,
                exclusive_minimum=exclusive_minimum,
                exclusive_maximum=exclusive_maximum,
            )
        ),
        (ValueKind.INTEGER,),
        keywords,
    )


def number_schema(
    *,
    multiple_of: float | None = None,
    minimum: float | None = None,
    maximum: float | None = None,
    exclusive_minimum: float | None = None,
    exclusive_maximum: float | None = None,
    **keywords: SchemaKeywords,
) -> ObjectSchema:
    return _typed(
        ValueSchema(
            number=NumberConstraints(
                multiple_of=multiple_of,
                minimum=minimum,
                maximum=maximum,
                exclusive_minimum=exclusive_minimum,
                exclusive_maximum=exclusive_maximum,
            )
        ),
        (ValueKind.NUMBER,),
        keywords,
    )


def boolean_schema(**keywords: SchemaKeywords) -> ObjectSchema:
    return _typed(None, (ValueKind.BOOLEAN,), keywords)


def null_schema(**keywords: SchemaKeywords) -> ObjectSchema:
    return _typed(None, (ValueKind.NULL,), keywords)


def array_schema(
    *,
    items: Items | Schema | Sequence[Schema] | bool | None = None,
    additional_items: Schema | bool | None = None,
    min_items: int | None = None,
    max_items: int | None = None,
    unique_items: bool | None = None,
    contains: Schema | bool | None = None,
    **keywords: SchemaKeywords,
) -> ObjectSchema:
    """Build an array schema.

    ``items`` may be a single schema (applied to every element) or a list of
    schemas (applied positionally, with ``additional_items`` past the end).
    """

    return _typed(
        ValueSchema(
            array=ArrayConstraints(
                items=items,
                additional_items=additional_items,
                min_items=min_items,
                max_items=max_items,
                unique_items=unique_items,
                contains=contains,
            )
        ),
        (ValueKind.ARRAY,),
        keywords,
    )


def object_schema(
    *,
    properties: Mapping[str, Schema | bool] | None = None,
    required: Sequence[str] | None = None,
    min_properties: int | None = None,
    max_properties: int | None = None,
    additional_properties: Schema | bool | None = None,
    pattern_properties: Mapping[str, Schema | bool] | None = None,
    property_names: Schema | bool | None = None,
    **keywords: SchemaKeywords,
) -> ObjectSchema:
    return _typed(
        ValueSchema(
            object=ObjectConstraints(
                properties=properties,
                pattern_properties=pattern_properties,
                additional_properties=additional_properties,
                required=None if required is None else tuple(required),
                min_properties=min_properties,
                max_properties=max_properties,
                property_names=property_names,
            )
        ),
        (ValueKind.OBJECT,),
        keywords,
    )


def union_schema(
    *,
    string: StringConstraints | None = None,
    integer: IntegerConstraints | None = None,
    number: NumberConstraints | None = None,
    array: ArrayConstraints | None = None,
    object: ObjectConstraints | None = None,  # noqa: A002 - mirrors the keyword name.
    boolean: bool = False,
    null: bool = False,
    **keywords: SchemaKeywords,
) -> ObjectSchema:
    """Build a schema accepting several kinds, each with its own constraints."""

    value_schema = ValueSchema(
        integer=integer, number=number, string=string, array=array, object=object
    )
    kinds = list(value_schema.value_types())
    if boolean:
        kinds.append(ValueKind.BOOLEAN)
    if null:
        kinds.append(ValueKind.NULL)
    if not kinds:
        raise ValueError("union_schema requires at least one kind")
    return _typed(value_schema, tuple(kinds), keywords)


def _typed(
    value_schema: ValueSchema | None,
    kinds: tuple[ValueKind, ...],
    keywords: Mapping[str, SchemaKeywords],
) -> ObjectSchema:
    if "type" in keywords or "value_schema" in keywords:
        raise TypeError("typed builders derive 'type' and 'value_schema' themselves")
    return ObjectSchema(type=ValueType.of(*kinds), value_schema=value_schema, **keywords)


__all__ = [
    "array_schema",
    "boolean_schema",
    "integer_schema",
    "null_schema",
    "number_schema",
    "object_schema",
    "string_schema",
    "union_schema",
]
