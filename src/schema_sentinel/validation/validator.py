"""Recursive schema validator that collects every failure with its path."""

from __future__ import annotations

import logging
import math
import re
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING

from schema_sentinel.domain.schema import (
    ArrayConstraints,
    BooleanSchema,
    IntegerConstraints,
    NumberConstraints,
    ObjectConstraints,
    ObjectSchema,
    Schema,
    StringConstraints,
    as_schema,
)
from schema_sentinel.domain.values import (
    ArrayValue,
    IntegerValue,
    NumberValue,
    ObjectValue,
    StringValue,
    Value,
    value_from_python,
)
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
)
from schema_sentinel.validation.regex_cache import PatternCompileError, RegexCache

if TYPE_CHECKING:
    from schema_sentinel.config.settings import ValidatorSettings

logger = logging.getLogger(__name__)


class _Context:
    """Per-call mutable state: the current path and the failures found so far."""

    __slots__ = ("failures", "path")

    def __init__(self, path: Path = ()) -> None:
        self.path: Path = path
        self.failures: list[Failure] = []

    def fail(self, reason: Reason) -> None:
        self.failures.append(Failure(path=self.path, reason=reason))

    @contextmanager
    def preserving_path(self) -> Iterator[Path]:
        saved = self.path
        try:
            yield saved
        finally:
            self.path = saved


class Validator:
    """Validate values against schemas.

    A validator is safe to share between threads; its only shared state is
    the regex cache. Create one and reuse it so compiled patterns are kept.
    """

    def __init__(
        self,
        regex_cache: RegexCache | None = None,
        *,
        log_failures: bool = False,
    ) -> None:
        self._regex_cache = regex_cache if regex_cache is not None else RegexCache()
        self._log_failures = log_failures

    @classmethod
    def from_settings(cls, settings: ValidatorSettings) -> Validator:
        """Cache bound and failure logging come from ``settings``.

        The log level is applied separately with
        ``configure_logging_from_settings``.
        """

        return cls(
            RegexCache(max_entries=settings.regex_cache_max_entries),
            log_failures=settings.log_failures,
        )

    @property
    def regex_cache(self) -> RegexCache:
        return self._regex_cache

    def validate(self, value: Value | object, schema: Schema | bool) -> None:
        """Raise ``ValidationError`` with every failure if ``value`` violates ``schema``."""

        failures = self.collect_failures(value, schema)
        if failures:
            if self._log_failures:
                logger.debug(
                    "validation failed",
                    extra={
                        "failure_count": len(failures),
                        "codes": [item.code for item in failures],
                    },
                )
            raise ValidationError(failures)

    def is_valid(self, value: Value | object, schema: Schema | bool) -> bool:
        return not self.collect_failures(value, schema)

    def collect_failures(self, value: Value | object, schema: Schema | bool) -> tuple[Failure, ...]:
        """Return every failure found, in traversal order; empty when valid."""

        context = _Context()
        self._validate(value_from_python(value), as_schema(schema), context)
        return tuple(context.failures)

    def _matches(self, value: Value, schema: Schema, path: Path) -> bool:
        trial = _Context(path)
        self._validate(value, schema, trial)
        return not trial.failures

    def _validate(self, value: Value, schema: Schema, context: _Context) -> None:
        match schema:
            case BooleanSchema(value=False):
                context.fail(FalseSchema())
            case BooleanSchema(value=True):
                pass
            case ObjectSchema():
                self._validate_object_schema(value, schema, context)

    def _validate_object_schema(
        self, value: Value, schema: ObjectSchema, context: _Context
    ) -> None:
        if schema.type is not None and not schema.type.is_compatible(value):
            context.fail(TypeMismatch(expected=schema.type))
        if schema.const is not None and value != schema.const:
            context.fail(ConstMismatch(expected=schema.const))
        if schema.enum is not None and value not in schema.enum:
            context.fail(EnumMismatch(expected=schema.enum))

        match value:
            case IntegerValue(value=integer):
                if schema.integer is not None:
                    self._validate_integer(integer, schema.integer, context)
                if schema.number is not None:
                    self._validate_number(_int_as_float(integer), schema.number, context)
            case NumberValue(value=number):
                if schema.number is not None:
                    self._validate_number(number, schema.number, context)
            case StringValue():
                if schema.string is not None:
                    self._validate_string(value, schema.string, context)
            case ArrayValue(items=items):
                if schema.array is not None:
                    self._validate_array(items, schema.array, context)
            case ObjectValue():
                if schema.object is not None:
                    self._validate_object(value, schema.object, context)

        if schema.not_ is not None and self._matches(value, schema.not_, context.path):
            context.fail(MatchesNot(schema=schema.not_))

        if schema.if_ is not None:
            self._validate_conditional(value, schema, context)
        if schema.all_of is not None:
            self._validate_all_of(value, schema.all_of, context)
        if schema.any_of is not None:
            self._validate_any_of(value, schema.any_of, context)
        if schema.one_of is not None:
            self._validate_one_of(value, schema.one_of, context)

    def _validate_integer(
        self, integer: int, constraints: IntegerConstraints, context: _Context
    ) -> None:
        multiple_of = constraints.multiple_of
        if multiple_of is not None and (multiple_of == 0 or integer % multiple_of != 0):
            context.fail(NotMultipleOf(multiple_of=multiple_of))
        if constraints.minimum is not None and integer < constraints.minimum:
            context.fail(BelowMinimum(inclusive=True, minimum=constraints.minimum))
        if constraints.exclusive_minimum is not None and integer <= constraints.exclusive_minimum:
            context.fail(BelowMinimum(inclusive=False, minimum=constraints.exclusive_minimum))
        if constraints.maximum is not None and integer > constraints.maximum:
            context.fail(AboveMaximum(inclusive=True, maximum=constraints.maximum))
        if constraints.exclusive_maximum is not None and integer >= constraints.exclusive_maximum:
            context.fail(AboveMaximum(inclusive=False, maximum=constraints.exclusive_maximum))

    def _validate_number(
        self, number: float, constraints: NumberConstraints, context: _Context
    ) -> None:
        multiple_of = constraints.multiple_of
        if multiple_of is not None and not _is_float_multiple(number, multiple_of):
            context.fail(NotMultipleOf(multiple_of=multiple_of))
        if constraints.minimum is not None and number < constraints.minimum:
            context.fail(BelowMinimum(inclusive=True, minimum=constraints.minimum))
        if constraints.exclusive_minimum is not None and number <= constraints.exclusive_minimum:
            context.fail(BelowMinimum(inclusive=False, minimum=constraints.exclusive_minimum))
        if constraints.maximum is not None and number > constraints.maximum:
            context.fail(AboveMaximum(inclusive=True, maximum=constraints.maximum))
        if constraints.exclusive_maximum is not None and number >= constraints.exclusive_maximum:
            context.fail(AboveMaximum(inclusive=False, maximum=constraints.exclusive_maximum))

    def _validate_string(
        self, string: StringValue, constraints: StringConstraints, context: _Context
    ) -> None:
        length = string.utf8_length
        if constraints.min_length is not None and length < constraints.min_length:
            context.fail(StringLengthTooShort(minimum=constraints.min_length))
        if constraints.max_length is not None and length > constraints.max_length:
            context.fail(StringLengthTooLong(maximum=constraints.max_length))
        if constraints.pattern is not None:
            compiled = self._compile(constraints.pattern, context)
            if compiled is not None and compiled.search(string.value) is None:
                context.fail(StringPatternMismatch(pattern=constraints.pattern))

    def _validate_array(
        self, items: Sequence[Value], constraints: ArrayConstraints, context: _Context
    ) -> None:
        count = len(items)
        if constraints.min_items is not None and count < constraints.min_items:
            context.fail(ArrayLengthTooShort(minimum=constraints.min_items))
        if constraints.max_items is not None and count > constraints.max_items:
            context.fail(ArrayLengthTooLong(maximum=constraints.max_items))
        if constraints.unique_items and not _all_unique(items):
            context.fail(ArrayItemsNotUnique())

        contains = constraints.contains
        contains_context = _Context(context.path)
        found = contains is None
        with context.preserving_path() as base:
            item_schemas = constraints.item_schemas(count)
            for index, (item, item_schema) in enumerate(zip(items, item_schemas, strict=True)):
                context.path = base + (ArrayIndex(index),)
                if item_schema is not None:
                    self._validate(item, item_schema, context)
                if contains is not None and not found:
                    contains_context.path = context.path
                    before = len(contains_context.failures)
                    self._validate(item, contains, contains_context)
                    found = len(contains_context.failures) == before

        if contains is not None and not found:
            context.fail(
                ArrayContainsMismatch(schema=contains, failures=tuple(contains_context.failures))
            )

    def _validate_object(
        self, value: ObjectValue, constraints: ObjectConstraints, context: _Context
    ) -> None:
        count = len(value)
        if constraints.min_properties is not None and count < constraints.min_properties:
            context.fail(ObjectPropertiesTooShort(minimum=constraints.min_properties))
        if constraints.max_properties is not None and count > constraints.max_properties:
            context.fail(ObjectPropertiesTooLong(maximum=constraints.max_properties))

        pattern_schemas: list[tuple[re.Pattern[str], Schema]] = []
        for pattern, pattern_schema in (constraints.pattern_properties or {}).items():
            compiled = self._compile(pattern, context)
            if compiled is not None:
                pattern_schemas.append((compiled, pattern_schema))

        required = constraints.required or ()
        remaining = set(required)
        with context.preserving_path() as base:
            for key, item in value.items():
                if constraints.property_names is not None:
                    context.path = base + (PropertyName(key),)
                    self._validate(StringValue(key), constraints.property_names, context)

                context.path = base + (PropertyValue(key),)
                property_schema = constraints.schema_for_property(key)
                if property_schema is not None:
                    self._validate(item, property_schema, context)
                for compiled, pattern_schema in pattern_schemas:
                    if compiled.search(key) is not None:
                        self._validate(item, pattern_schema, context)

                remaining.discard(key)

        if remaining:
            missing = tuple(name for name in dict.fromkeys(required) if name in remaining)
            context.fail(ObjectMissingRequiredProperties(required=tuple(required), missing=missing))

    def _validate_conditional(self, value: Value, schema: ObjectSchema, context: _Context) -> None:
        assert schema.if_ is not None
        with context.preserving_path() as base:
            if self._matches(value, schema.if_, base):
                if schema.then is not None:
                    context.path = base + (ThenBranch(),)
                    self._validate(value, schema.then, context)
            elif schema.else_ is not None:
                context.path = base + (ElseBranch(),)
                self._validate(value, schema.else_, context)

    def _validate_all_of(
        self, value: Value, schemas: Sequence[Schema], context: _Context
    ) -> None:
        branch_context = _Context(context.path)
        with branch_context.preserving_path() as base:
            for index, subschema in enumerate(schemas):
                branch_context.path = base + (AllOfBranch(index),)
                self._validate(value, subschema, branch_context)

        if branch_context.failures:
            context.fail(AllOfMismatch(failures=tuple(branch_context.failures)))

    def _validate_any_of(
        self, value: Value, schemas: Sequence[Schema], context: _Context
    ) -> None:
        branch_context = _Context(context.path)
        matched = False
        with branch_context.preserving_path() as base:
            for index, subschema in enumerate(schemas):
                branch_context.path = base + (AnyOfBranch(index),)
                before = len(branch_context.failures)
                self._validate(value, subschema, branch_context)
                if len(branch_context.failures) == before:
                    matched = True
                    break

        if not matched:
            context.fail(AnyOfMismatch(failures=tuple(branch_context.failures)))

    def _validate_one_of(
        self, value: Value, schemas: Sequence[Schema], context: _Context
    ) -> None:
        # Every branch runs: "exactly one" needs the full match count.
        branch_context = _Context(context.path)
        match_count = 0
        with branch_context.preserving_path() as base:
            for index, subschema in enumerate(schemas):
                branch_context.path = base + (OneOfBranch(index),)
                before = len(branch_context.failures)
                self._validate(value, subschema, branch_context)
                if len(branch_context.failures) == before:
                    match_count += 1

        if match_count != 1:
            context.fail(OneOfMismatch(failures=tuple(branch_context.failures)))

    def _compile(self, pattern: str, context: _Context) -> re.Pattern[str] | None:
        try:
            return self._regex_cache.compile(pattern)
        except PatternCompileError as exc:
            context.fail(PatternCompilationError(pattern=pattern, message=exc.message))
            return None


def _all_unique(items: Sequence[Value]) -> bool:
    seen: set[Value] = set()
    for item in items:
        if item in seen:
            return False
        seen.add(item)
    return True


def _int_as_float(integer: int) -> float:
    try:
        return float(integer)
    except OverflowError:
        return math.copysign(math.inf, integer)


def _is_float_multiple(number: float, multiple_of: float) -> bool:
    # Exact zero-remainder check; fractional divisors can misreport.
    if multiple_of == 0 or not math.isfinite(number):
        return False
    return math.fmod(number, multiple_of) == 0.0


_DEFAULT_LOCK = threading.Lock()
_DEFAULT_VALIDATOR: Validator | None = None


def default_validator() -> Validator:
    """Return the lazily created process-wide validator."""

    global _DEFAULT_VALIDATOR
    with _DEFAULT_LOCK:
        if _DEFAULT_VALIDATOR is None:
            _DEFAULT_VALIDATOR = Validator()
        return _DEFAULT_VALIDATOR


def validate(value: Value | object, schema: Schema | bool) -> None:
    """Validate with the default validator; raises ``ValidationError``."""

    default_validator().validate(value, schema)


def is_valid(value: Value | object, schema: Schema | bool) -> bool:
    return default_validator().is_valid(value, schema)


__all__ = [
    "Validator",
    "default_validator",
    "is_valid",
    "validate",
]
