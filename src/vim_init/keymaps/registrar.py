"""Applies declared key bindings to a host registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from vim_init.runtime import telemetry

if TYPE_CHECKING:  # pragma: no cover
    from vim_init.host import HostContext


@dataclass(frozen=True, slots=True)
class KeymapDecl:
    """(mode-set, key sequence, action, description) as written in config."""

    modes: str | tuple[str, ...]
    lhs: str
    rhs: str | Callable[..., object]
    desc: str = ""


def apply_keymaps(
    host: "HostContext",
    declarations: Iterable[KeymapDecl],
    *,
    buffer: Optional[int] = None,
) -> int:
    """Register every declaration in order; returns bindings written."""

    count = 0
    with telemetry.span(
        "startup::keymaps",
        component="keymaps",
        metadata={"buffer": buffer if buffer is not None else "global"},
    ) as handle:
        for decl in declarations:
            bindings = host.keymaps.set(
                decl.modes, decl.lhs, decl.rhs, desc=decl.desc, buffer=buffer
            )
            count += len(bindings)
        handle.add_metadata("bindings", count)
    return count


__all__ = ["KeymapDecl", "apply_keymaps"]
