"""Applies declared autocommands to a host registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

from vim_init.runtime import telemetry

from .registry import AutocmdCallback

if TYPE_CHECKING:  # pragma: no cover
    from vim_init.host import HostContext


@dataclass(frozen=True, slots=True)
class AutocmdDecl:
    events: str | tuple[str, ...]
    pattern: str | tuple[str, ...] = "*"
    callback: Optional[AutocmdCallback] = None
    command: Optional[str] = None
    once: bool = False
    desc: str = ""


def apply_autocmds(
    host: "HostContext",
    declarations: Iterable[AutocmdDecl],
    *,
    group: Optional[str] = None,
) -> list[int]:
    """Create ``group`` (cleared) if given and register every declaration."""

    ids: list[int] = []
    with telemetry.span(
        "startup::autocmds", component="autocmds", metadata={"group": group or ""}
    ):
        group_id = host.autocmds.create_augroup(group) if group else None
        for decl in declarations:
            ids.append(
                host.autocmds.create_autocmd(
                    decl.events,
                    pattern=decl.pattern,
                    group=group_id,
                    callback=decl.callback,
                    command=decl.command,
                    once=decl.once,
                    desc=decl.desc,
                )
            )
    return ids


__all__ = ["AutocmdDecl", "apply_autocmds"]
