"""Dataclasses describing key sequences, actions and bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Literal

ActionKind = Literal["callable", "command", "nop", "keys"]

DEFAULT_TIMEOUT_MS = 1000


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers) + "+" + self.key
        return self.key


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Immutable run of keystrokes; ``timeout_ms`` bounds the pending wait."""

    strokes: tuple[KeyStroke, ...]
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @property
    def signature(self) -> str:
        return " ".join(self.tokens)

    @classmethod
    def from_strings(
        cls, *keys: str, timeout_ms: int = DEFAULT_TIMEOUT_MS
    ) -> "KeySequence":
        return cls(tuple(KeyStroke(key) for key in keys if key), timeout_ms)


@dataclass(frozen=True, slots=True)
class ActionRef:
    """What a binding does: a callable, an ex command, ``<NOP>`` or keys."""

    rhs: str | Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.rhs, str):
            if not self.rhs:
                raise ValueError("rhs cannot be empty")
        elif not callable(self.rhs):
            raise TypeError("rhs must be a string or a callable")

    @property
    def kind(self) -> ActionKind:
        if callable(self.rhs):
            return "callable"
        text = self.rhs
        if text.upper() == "<NOP>":
            return "nop"
        if text.lower().startswith("<cmd>") and text.upper().endswith("<CR>"):
            return "command"
        return "keys"

    @property
    def command(self) -> str:
        """Ex command wrapped by ``<cmd>...<CR>``."""

        if self.kind != "command":
            raise ValueError("action is not a <cmd> mapping")
        assert isinstance(self.rhs, str)
        return self.rhs[len("<cmd>") : -len("<CR>")].strip()

    @property
    def label(self) -> str:
        if isinstance(self.rhs, str):
            return self.rhs
        name = getattr(self.rhs, "__qualname__", None) or getattr(
            self.rhs, "__name__", None
        )
        return f"<callable {name}>" if name else repr(self.rhs)


@dataclass(frozen=True, slots=True)
class Binding:
    """One registered mapping for a single mode, optionally buffer-local."""

    mode: str
    lhs: str
    sequence: KeySequence
    action: ActionRef
    description: str = ""
    buffer: int | None = None

    def __post_init__(self) -> None:
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.lhs:
            raise ValueError("binding lhs cannot be empty")

    @property
    def key_signature(self) -> str:
        return self.sequence.signature

    @property
    def key(self) -> tuple[str, str, int | None]:
        return (self.mode, self.key_signature, self.buffer)


__all__ = [
    "ActionKind",
    "ActionRef",
    "Binding",
    "DEFAULT_TIMEOUT_MS",
    "KeySequence",
    "KeyStroke",
]
