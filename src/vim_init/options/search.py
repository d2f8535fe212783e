"""Search case-sensitivity as decided by ``ignorecase`` and ``smartcase``."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Protocol

_FORCE_IGNORE = "\\c"
_FORCE_MATCH = "\\C"


class OptionLookup(Protocol):
    def get(self, name: str, default: object = ...) -> object: ...


def _strip_case_flags(pattern: str) -> tuple[str, bool | None]:
    forced: bool | None = None
    if _FORCE_MATCH in pattern:
        forced = True
    elif _FORCE_IGNORE in pattern:
        forced = False
    cleaned = pattern.replace(_FORCE_MATCH, "").replace(_FORCE_IGNORE, "")
    return cleaned, forced


def _has_uppercase(pattern: str) -> bool:
    # An escaped letter is an atom such as \S or \W, not literal text.
    escaped = False
    for char in pattern:
        if escaped:
            escaped = False
            continue
        if char == "\\":
            escaped = True
            continue
        if char.isupper():
            return True
    return False


def is_case_sensitive(pattern: str, options: OptionLookup) -> bool:
    """Return ``True`` when a search for ``pattern`` must match case exactly.

    ``\\C`` or ``\\c`` in the pattern override the options.
    """

    cleaned, forced = _strip_case_flags(pattern)
    if forced is not None:
        return forced
    if not options.get("ignorecase", False):
        return True
    if options.get("smartcase", False):
        return _has_uppercase(cleaned)
    return False


def compile_search(pattern: str, options: OptionLookup) -> re.Pattern[str]:
    """Compile ``pattern`` as literal text with the effective case flags."""

    cleaned, _ = _strip_case_flags(pattern)
    flags = 0 if is_case_sensitive(pattern, options) else re.IGNORECASE
    return re.compile(re.escape(cleaned), flags)


def find_matches(
    lines: Iterable[str], pattern: str, options: OptionLookup
) -> Iterator[tuple[int, int]]:
    """Yield ``(row, col)`` for every hit of ``pattern`` in ``lines``."""

    compiled = compile_search(pattern, options)
    for row, line in enumerate(lines):
        for match in compiled.finditer(line):
            yield row, match.start()


__all__ = ["is_case_sensitive", "compile_search", "find_matches"]
