"""Handler objects used as binding actions.

Each handler receives the invocation context when the key fires instead of
capturing editor state when it is declared.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from vim_init.host import KeymapInvocation


@dataclass(frozen=True, slots=True)
class ExCommand:
    """Runs an ex command, like ``vim.cmd.bnext``."""

    command: str

    def __call__(self, invocation: "KeymapInvocation") -> object:
        return invocation.host.run_command(self.command)


@dataclass(frozen=True, slots=True)
class HostFunction:
    """Calls a named host facility (``lsp.buf.rename``) for the buffer."""

    name: str

    def __call__(self, invocation: "KeymapInvocation") -> object:
        return invocation.host.record_call(
            self.name, (), {"buffer": invocation.buffer}
        )


__all__ = ["ExCommand", "HostFunction"]
