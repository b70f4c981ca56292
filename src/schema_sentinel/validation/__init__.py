"""Validator, regex cache, and the failure model."""

from schema_sentinel.validation.errors import (
    AboveMaximum,
    AllOfBranch,
    AllOfMismatch,
    AnyOfBranch,
    AnyOfMismatch,
    ArrayContainsMismatch,
    ArrayIndex,
    ArrayItemsNotUnique,
    ArrayLengthTooLong,
    ArrayLengthTooShort,
    BelowMinimum,
    ConstMismatch,
    ElseBranch,
    EnumMismatch,
    Failure,
    FalseSchema,
    MatchesNot,
    NotMultipleOf,
    ObjectMissingRequiredProperties,
    ObjectPropertiesTooLong,
    ObjectPropertiesTooShort,
    OneOfBranch,
    OneOfMismatch,
    Path,
    PathElement,
    PatternCompilationError,
    PropertyName,
    PropertyValue,
    Reason,
    StringLengthTooLong,
    StringLengthTooShort,
    StringPatternMismatch,
    ThenBranch,
    TypeMismatch,
    ValidationError,
    format_path,
)
from schema_sentinel.validation.regex_cache import PatternCompileError, RegexCache
from schema_sentinel.validation.validator import (
    Validator,
    default_validator,
    is_valid,
    validate,
)

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
    "OneOfBranch",
    "OneOfMismatch",
    "Path",
    "PathElement",
    "PatternCompilationError",
    "PatternCompileError",
    "PropertyName",
    "PropertyValue",
    "Reason",
    "RegexCache",
    "StringLengthTooLong",
    "StringLengthTooShort",
    "StringPatternMismatch",
    "ThenBranch",
    "TypeMismatch",
    "ValidationError",
    "Validator",
    "default_validator",
    "format_path",
    "is_valid",
    "validate",
]
