"""Immutable value and schema models plus typed schema builders."""

from schema_sentinel.domain.builders import (
    array_schema,
    boolean_schema,
    integer_schema,
    null_schema,
    number_schema,
    object_schema,
    string_schema,
    union_schema,
)
from schema_sentinel.domain.schema import (
    FALSE_SCHEMA,
    TRUE_SCHEMA,
    ArrayConstraints,
    BooleanSchema,
    IntegerConstraints,
    Items,
    ItemsForAll,
    NumberConstraints,
    ObjectConstraints,
    ObjectSchema,
    PositionalItems,
    Schema,
    StringConstraints,
    ValueSchema,
    ValueType,
    as_schema,
)
from schema_sentinel.domain.values import (
    NULL,
    ArrayValue,
    BooleanValue,
    IntegerValue,
    JSONValue,
    NullValue,
    NumberValue,
    ObjectValue,
    StringValue,
    Value,
    ValueKind,
    describe_value,
    is_value,
    value_from_python,
    value_to_python,
)

__all__ = [
    "FALSE_SCHEMA",
    "NULL",
    "TRUE_SCHEMA",
    "ArrayConstraints",
    "ArrayValue",
    "BooleanSchema",
    "BooleanValue",
    "IntegerConstraints",
    "IntegerValue",
    "Items",
    "ItemsForAll",
    "JSONValue",
    "NullValue",
    "NumberConstraints",
    "NumberValue",
    "ObjectConstraints",
    "ObjectSchema",
    "ObjectValue",
    "PositionalItems",
    "Schema",
    "StringConstraints",
    "StringValue",
    "Value",
    "ValueKind",
    "ValueSchema",
    "ValueType",
    "array_schema",
    "as_schema",
    "boolean_schema",
    "describe_value",
    "integer_schema",
    "is_value",
    "null_schema",
    "number_schema",
    "object_schema",
    "string_schema",
    "union_schema",
    "value_from_python",
    "value_to_python",
]
