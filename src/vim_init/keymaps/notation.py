"""Parsing of Vim key notation (``<C-h>``, ``<leader>rn``) and mode sets."""

from __future__ import annotations

from typing import Iterable

from .models import DEFAULT_TIMEOUT_MS, KeySequence, KeyStroke

NORMAL = "normal"
VISUAL = "visual"
SELECT = "select"
OPERATOR = "operator"
INSERT = "insert"
COMMAND = "command"
TERMINAL = "terminal"

ALL_MODES = (NORMAL, VISUAL, SELECT, OPERATOR, INSERT, COMMAND, TERMINAL)

_MODE_SHORTHANDS: dict[str, tuple[str, ...]] = {
    "": (NORMAL, VISUAL, SELECT, OPERATOR),
    "n": (NORMAL,),
    "v": (VISUAL, SELECT),
    "x": (VISUAL,),
    "s": (SELECT,),
    "o": (OPERATOR,),
    "i": (INSERT,),
    "c": (COMMAND,),
    "t": (TERMINAL,),
    "!": (INSERT, COMMAND),
}

_SPECIAL_KEYS = {
    "tab": "tab",
    "cr": "enter",
    "enter": "enter",
    "return": "enter",
    "esc": "esc",
    "bs": "backspace",
    "backspace": "backspace",
    "del": "delete",
    "delete": "delete",
    "space": "space",
    "up": "up",
    "down": "down",
    "left": "left",
    "right": "right",
    "home": "home",
    "end": "end",
    "pageup": "pageup",
    "pagedown": "pagedown",
    "insert": "insert",
    "lt": "<",
    "bar": "|",
    "bslash": "\\",
}

_MODIFIER_PREFIXES = {
    "c": "ctrl",
    "s": "shift",
    "a": "alt",
    "m": "alt",
    "d": "cmd",
}


def expand_modes(modes: str | Iterable[str]) -> tuple[str, ...]:
    """Expand ``""``, ``"n"``, ``{"n", "v"}`` or full names into mode names."""

    items = [modes] if isinstance(modes, str) else list(modes)
    result: list[str] = []
    for item in items:
        if item in ALL_MODES:
            expanded: tuple[str, ...] = (item,)
        else:
            try:
                expanded = _MODE_SHORTHANDS[item]
            except KeyError as exc:
                raise ValueError(f"Unknown mode '{item}'") from exc
        for mode in expanded:
            if mode not in result:
                result.append(mode)
    if not result:
        raise ValueError("mode set cannot be empty")
    return tuple(result)


def _char_stroke(char: str) -> KeyStroke:
    if char == " ":
        return KeyStroke("space")
    return KeyStroke(char)


def _special_stroke(name: str) -> KeyStroke | None:
    parts = name.split("-")
    modifiers: list[str] = []
    # A trailing "-" (as in "<C-->") names the minus key itself.
    if name.endswith("-") and len(parts) > 1:
        parts = parts[:-2] + ["-"]
    *prefixes, base = parts
    for prefix in prefixes:
        modifier = _MODIFIER_PREFIXES.get(prefix.lower())
        if modifier is None:
            return None
        modifiers.append(modifier)
    if not base:
        return None
    key = _SPECIAL_KEYS.get(base.lower())
    if key is None:
        if len(base) != 1:
            return None
        key = base.lower() if "ctrl" in modifiers else base
    return KeyStroke(key, tuple(modifiers))


def parse_keys(
    lhs: str, *, leader: str = "\\", timeout_ms: int = DEFAULT_TIMEOUT_MS
) -> KeySequence:
    """Parse ``lhs`` into a :class:`KeySequence`.

    ``<leader>`` expands to ``leader``; unrecognised ``<...>`` groups are
    taken literally, one stroke per character.
    """

    strokes: list[KeyStroke] = []
    index = 0
    while index < len(lhs):
        char = lhs[index]
        if char == "<":
            close = lhs.find(">", index + 1)
            if close != -1:
                name = lhs[index + 1 : close]
                if name.lower() == "leader":
                    strokes.extend(_char_stroke(c) for c in leader)
                    index = close + 1
                    continue
                stroke = _special_stroke(name) if name else None
                if stroke is not None:
                    strokes.append(stroke)
                    index = close + 1
                    continue
        strokes.append(_char_stroke(char))
        index += 1
    if not strokes:
        raise ValueError(f"Key sequence '{lhs}' is empty")
    return KeySequence(tuple(strokes), timeout_ms=timeout_ms)


__all__ = [
    "ALL_MODES",
    "NORMAL",
    "VISUAL",
    "SELECT",
    "OPERATOR",
    "INSERT",
    "COMMAND",
    "TERMINAL",
    "expand_modes",
    "parse_keys",
]
