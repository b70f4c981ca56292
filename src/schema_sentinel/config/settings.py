"""Validator settings, their defaults, and structured validation of raw mappings."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass
from typing import Any, Final

from schema_sentinel.constants import DEFAULT_LOG_FAILURES, DEFAULT_LOG_LEVEL

SETTINGS_FIELDS: Final[tuple[str, ...]] = (
    "regex_cache_max_entries",
    "log_failures",
    "log_level",
)

_LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class ValidatorSettings:
    """Effective runtime settings.

    ``regex_cache_max_entries`` of ``None`` keeps every compiled pattern.
    """

    regex_cache_max_entries: int | None = None
    log_failures: bool = DEFAULT_LOG_FAILURES
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ConfigValidationIssue:
    """Single structured validation failure."""

    path: str
    message: str


@dataclass(frozen=True, slots=True)
class SettingsValidationResult:
    """Validation result with parsed settings when no issues were found."""

    settings: ValidatorSettings | None
    issues: tuple[ConfigValidationIssue, ...]

    @property
    def is_valid(self) -> bool:
        return self.settings is not None and not self.issues


class ConfigValidationError(ValueError):
    """Raised when strict settings validation fails."""

    def __init__(self, issues: Sequence[ConfigValidationIssue]) -> None:
        self.issues = tuple(issues)
        if not self.issues:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        super().__init__(f"invalid config:\n{rendered}")


class _IssueCollector:
    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[ConfigValidationIssue] = []

    def add(self, path: str, message: str) -> None:
        self._items.append(ConfigValidationIssue(path=path, message=message))

    def items(self) -> tuple[ConfigValidationIssue, ...]:
        return tuple(self._items)

    @property
    def has_issues(self) -> bool:
        return bool(self._items)


def default_settings() -> ValidatorSettings:
    return ValidatorSettings()


def validate_settings(payload: Mapping[str, object] | object) -> SettingsValidationResult:
    """Validate a raw settings mapping; missing keys take their defaults.

    A ``regex_cache_max_entries`` of ``0`` means unbounded and parses to ``None``.
    """

    issues = _IssueCollector()
    if not isinstance(payload, Mapping):
        issues.add("<root>", f"expected a table, got {type(payload).__name__}")
        return SettingsValidationResult(settings=None, issues=issues.items())

    for key in sorted(payload, key=str):
        if key not in SETTINGS_FIELDS:
            issues.add(str(key), "unknown setting")

    defaults = default_settings()
    max_entries = _validate_max_entries(
        payload.get("regex_cache_max_entries", defaults.regex_cache_max_entries), issues
    )
    log_failures = _validate_bool(
        "log_failures", payload.get("log_failures", defaults.log_failures), issues
    )
    log_level = _validate_log_level(payload.get("log_level", defaults.log_level), issues)

    if issues.has_issues:
        return SettingsValidationResult(settings=None, issues=issues.items())
    return SettingsValidationResult(
        settings=ValidatorSettings(
            regex_cache_max_entries=max_entries,
            log_failures=log_failures,
            log_level=log_level,
        ),
        issues=(),
    )


def assert_valid_settings(payload: Mapping[str, object] | object) -> ValidatorSettings:
    """Validate settings and raise ``ConfigValidationError`` on failure."""

    result = validate_settings(payload)
    if result.settings is None:
        raise ConfigValidationError(result.issues)
    return result.settings


def _validate_max_entries(value: object, issues: _IssueCollector) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        issues.add("regex_cache_max_entries", "must be an integer")
        return None
    if value < 0:
        issues.add("regex_cache_max_entries", "must be >= 0 (0 means unbounded)")
        return None
    return value or None


def _validate_bool(path: str, value: object, issues: _IssueCollector) -> bool:
    if not isinstance(value, bool):
        issues.add(path, "must be a boolean")
        return False
    return value


def _validate_log_level(value: object, issues: _IssueCollector) -> str:
    if not isinstance(value, str):
        issues.add("log_level", "must be a string")
        return DEFAULT_LOG_LEVEL
    normalized = value.strip().upper()
    if normalized not in _LOG_LEVELS:
        issues.add("log_level", f"must be one of: {', '.join(_LOG_LEVELS)}")
        return DEFAULT_LOG_LEVEL
    return normalized


__all__ = [
    "SETTINGS_FIELDS",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "SettingsValidationResult",
    "ValidatorSettings",
    "assert_valid_settings",
    "default_settings",
    "validate_settings",
]
