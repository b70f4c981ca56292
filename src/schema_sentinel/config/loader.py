"""Load effective validator settings from defaults, a TOML file, env vars, and overrides.

Precedence: explicit overrides > env (``SCHEMA_SENTINEL_``) > file > defaults.
Only the ``[schema_sentinel]`` table of the file is read, so the settings can
live in a shared TOML file alongside other tools' tables.
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Literal

from schema_sentinel.config.settings import ValidatorSettings, assert_valid_settings
from schema_sentinel.constants import CONFIG_TABLE, DEFAULT_CONFIG_FILE, ENV_PREFIX

logger = logging.getLogger(__name__)

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})


@dataclass(frozen=True, slots=True)
class _Binding:
    key: str
    value_type: Literal["str", "int", "bool"]

    @property
    def env_name(self) -> str:
        return ENV_PREFIX + self.key.upper()


_BINDINGS: Final[tuple[_Binding, ...]] = (
    _Binding("regex_cache_max_entries", "int"),
    _Binding("log_failures", "bool"),
    _Binding("log_level", "str"),
)


class ConfigLoadError(ValueError):
    """Raised when settings cannot be loaded or env values cannot be coerced."""


def load_settings(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, object] | None = None,
) -> ValidatorSettings:
    """Load effective settings; raises ``ConfigLoadError`` or ``ConfigValidationError``.

    Without ``config_path`` the default file in the working directory is used
    when present. An explicit path must exist. ``None`` override values are
    treated as not given.
    """

    resolved_path = _resolve_config_path(config_path)
    env_map = os.environ if environ is None else environ

    merged: dict[str, Any] = {}
    merged.update(_load_table(resolved_path, required=config_path is not None))
    merged.update(_collect_env_overrides(env_map))
    merged.update(
        {key: value for key, value in (overrides or {}).items() if value is not None}
    )

    settings = assert_valid_settings(merged)
    logger.debug("settings loaded", extra={"config_path": str(resolved_path), **settings.to_dict()})
    return settings


def _resolve_config_path(config_path: str | Path | None) -> Path:
    if config_path is None:
        return (Path.cwd() / DEFAULT_CONFIG_FILE).resolve()
    return Path(config_path).expanduser().resolve()


def _load_table(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigLoadError(f"config file not found: {path}")
        return {}

    try:
        with path.open("rb") as handle:
            parsed = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"unable to read config file {path}: {exc}") from exc

    table = parsed.get(CONFIG_TABLE)
    if table is None:
        return {}
    if not isinstance(table, dict):
        raise ConfigLoadError(f"[{CONFIG_TABLE}] must be a table: {path}")
    return dict(table)


def _collect_env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for binding in _BINDINGS:
        raw = environ.get(binding.env_name)
        if raw is None:
            continue
        overrides[binding.key] = _coerce_env(raw, binding)
    return overrides


def _coerce_env(raw: str, binding: _Binding) -> object:
    value = raw.strip()
    if binding.value_type == "str":
        return value
    if binding.value_type == "int":
        try:
            return int(value)
        except ValueError as exc:
            raise ConfigLoadError(
                f"{binding.env_name} -> {binding.key} must be an integer"
            ) from exc

    lowered = value.lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise ConfigLoadError(
        f"{binding.env_name} -> {binding.key} must be a boolean (true/false/1/0/yes/no/on/off)"
    )


__all__ = ["ConfigLoadError", "load_settings"]
