"""schema-sentinel: structural validation of JSON-like values against JSON Schema.

Build a schema with the typed builders (or ``ObjectSchema`` directly), then
validate Python-native JSON data or ``Value`` trees::

    from schema_sentinel import object_schema, string_schema, validate

    schema = object_schema(properties={"name": string_schema(min_length=1)}, required=["name"])
    validate({"name": "Ada"}, schema)

Importing the package has no side effects: no config loading, no logging setup.
"""

from schema_sentinel.config import (
    ConfigLoadError,
    ConfigValidationError,
    ValidatorSettings,
    load_settings,
)
from schema_sentinel.domain import (
    FALSE_SCHEMA,
    NULL,
    TRUE_SCHEMA,
    ArrayConstraints,
    ArrayValue,
    BooleanSchema,
    BooleanValue,
    IntegerConstraints,
    IntegerValue,
    ItemsForAll,
    NullValue,
    NumberConstraints,
    NumberValue,
    ObjectConstraints,
    ObjectSchema,
    ObjectValue,
    PositionalItems,
    Schema,
    StringConstraints,
    StringValue,
    Value,
    ValueKind,
    ValueSchema,
    ValueType,
    array_schema,
    boolean_schema,
    integer_schema,
    null_schema,
    number_schema,
    object_schema,
    string_schema,
    union_schema,
    value_from_python,
    value_to_python,
)
from schema_sentinel.observability import configure_logging, configure_logging_from_settings
from schema_sentinel.validation import (
    Failure,
    PatternCompileError,
    RegexCache,
    ValidationError,
    Validator,
    default_validator,
    format_path,
    is_valid,
    validate,
)

__version__ = "0.1.0"

__all__ = [
    "FALSE_SCHEMA",
    "NULL",
    "TRUE_SCHEMA",
    "ArrayConstraints",
    "ArrayValue",
    "BooleanSchema",
    "BooleanValue",
    "ConfigLoadError",
    "ConfigValidationError",
    "Failure",
    "IntegerConstraints",
    "IntegerValue",
    "ItemsForAll",
    "NullValue",
    "NumberConstraints",
    "NumberValue",
    "ObjectConstraints",
    "ObjectSchema",
    "ObjectValue",
    "PatternCompileError",
    "PositionalItems",
    "RegexCache",
    "Schema",
    "StringConstraints",
    "StringValue",
    "ValidationError",
    "Validator",
    "ValidatorSettings",
    "Value",
    "ValueKind",
    "ValueSchema",
    "ValueType",
    "__version__",
    "array_schema",
    "boolean_schema",
    "configure_logging",
    "configure_logging_from_settings",
    "default_validator",
    "format_path",
    "integer_schema",
    "is_valid",
    "load_settings",
    "null_schema",
    "number_schema",
    "object_schema",
    "string_schema",
    "union_schema",
    "validate",
    "value_from_python",
    "value_to_python",
]
