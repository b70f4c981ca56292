"""Thread-safe memoized regular-expression compiler keyed by raw pattern text."""

from __future__ import annotations

import logging
import re
import threading
from collections import OrderedDict
from collections.abc import Callable
from typing import Final

PatternCompiler = Callable[[str], "re.Pattern[str]"]

logger = logging.getLogger(__name__)

_DEFAULT_COMPILER: Final[PatternCompiler] = re.compile


class PatternCompileError(ValueError):
    """Raised when a pattern cannot be compiled."""

    def __init__(self, pattern: str, message: str) -> None:
        self.pattern = pattern
        self.message = message
        super().__init__(f"invalid pattern {pattern!r}: {message}")


class RegexCache:
    """Compile each distinct pattern at most once and reuse the compiled matcher.

    Lookup and first compilation happen under one lock, so concurrent callers
    racing on a new pattern still trigger a single compile. Failed patterns
    are not cached. With ``max_entries`` set, least recently used patterns are
    evicted once the bound is exceeded.
    """

    def __init__(
        self,
        compiler: PatternCompiler | None = None,
        *,
        max_entries: int | None = None,
    ) -> None:
        if max_entries is not None and max_entries <= 0:
            raise ValueError("max_entries must be > 0 or None")
        self._compiler = compiler or _DEFAULT_COMPILER
        self._max_entries = max_entries
        self._lock = threading.Lock()
        self._entries: OrderedDict[str, re.Pattern[str]] = OrderedDict()

    @property
    def max_entries(self) -> int | None:
        return self._max_entries

    def compile(self, pattern: str) -> re.Pattern[str]:
        with self._lock:
            cached = self._entries.get(pattern)
            if cached is not None:
                self._entries.move_to_end(pattern)
                return cached

            try:
                compiled = self._compiler(pattern)
            except (re.error, ValueError, TypeError, OverflowError, RecursionError) as exc:
                logger.warning(
                    "regex compile failed",
                    extra={"pattern": pattern, "error": str(exc)},
                )
                raise PatternCompileError(pattern, str(exc)) from exc

            logger.debug("regex compiled", extra={"pattern": pattern})
            self._entries[pattern] = compiled
            if self._max_entries is not None and len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
            return compiled

    def matches(self, pattern: str, text: str) -> bool:
        """Unanchored search, as JSON Schema ``pattern`` requires."""

        return self.compile(pattern).search(text) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, pattern: object) -> bool:
        with self._lock:
            return pattern in self._entries


__all__ = ["PatternCompileError", "PatternCompiler", "RegexCache"]
