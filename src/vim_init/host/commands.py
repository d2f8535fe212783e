"""Ex command table and the built-in commands startup relies on."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Callable, Dict, List

from vim_init.errors import UnknownCommandError, VimInitError
from vim_init.runtime import telemetry

from .buffers import View

if TYPE_CHECKING:  # pragma: no cover
    from .context import HostContext

CommandHandler = Callable[["HostContext", List[str]], object]

SILENT_PREFIX = "silent!"
BUILTIN_COLORSCHEMES = frozenset({"default", "habamax", "quiet", "retrobox", "vim"})


class CommandTable:
    """Maps command names (and aliases) to handlers."""

    def __init__(self, host: "HostContext", *, builtins: bool = True) -> None:
        self._host = host
        self._handlers: Dict[str, CommandHandler] = {}
        if builtins:
            for name, handler in _BUILTIN_HANDLERS.items():
                self._handlers[name] = handler

    def register(
        self, name: str, handler: CommandHandler, *, aliases: tuple[str, ...] = ()
    ) -> None:
        if not name:
            raise ValueError("command name cannot be empty")
        for key in (name, *aliases):
            self._handlers[key] = handler

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._handlers))

    def run(self, line: str) -> object:
        """Execute one command line.

        With a ``silent!`` prefix, editor errors are logged at debug level
        and swallowed; ``None`` is returned in that case.
        """

        text = line.strip().lstrip(":").strip()
        silent = False
        if text.startswith(SILENT_PREFIX):
            silent = True
            text = text[len(SILENT_PREFIX) :].strip()
        if not text:
            return None
        name, *args = text.split()
        try:
            handler = self._handlers.get(name)
            if handler is None:
                raise UnknownCommandError(name)
            return handler(self._host, args)
        except (VimInitError, KeyError) as exc:
            if not silent:
                raise
            telemetry.record_event(
                "command.silenced",
                level="debug",
                data={"command": name, "error": str(exc)},
            )
            return None


def _switch(host: "HostContext", args: List[str], *, step: int) -> object:
    del args
    target = host.buffers.next_id(step)
    if target is None:
        return None
    return host.switch_buffer(target)


def _explore(host: "HostContext", args: List[str]) -> object:
    current = host.buffers.current
    if args:
        directory = args[0]
    elif current is not None and "/" in current.name:
        directory = current.name.rsplit("/", 1)[0] or "/"
    else:
        directory = "."
    return host.open_buffer(f"netrw://{directory}")


def _nohlsearch(host: "HostContext", args: List[str]) -> object:
    del args
    host.search_highlight = False
    return None


def _colorscheme(host: "HostContext", args: List[str]) -> object:
    if not args:
        host.echo(host.colorscheme)
        return host.colorscheme
    name = args[0]
    if name not in BUILTIN_COLORSCHEMES and name not in host.colorschemes:
        raise VimInitError(f"Cannot find color scheme '{name}'")
    host.colorscheme = name
    return name


def _mkview(host: "HostContext", args: List[str]) -> object:
    del args
    current = host.buffers.current
    if current is None:
        raise VimInitError("No current buffer")
    host.views.save(current.name, View(cursor=current.cursor, folds=current.folds))
    return None


def _loadview(host: "HostContext", args: List[str]) -> object:
    del args
    current = host.buffers.current
    if current is None:
        raise VimInitError("No current buffer")
    view = host.views.load(current.name)
    current.cursor = view.cursor
    current.folds = view.folds
    return view


def _echo(host: "HostContext", args: List[str]) -> object:
    message = " ".join(args)
    host.echo(message)
    return message


_BUILTIN_HANDLERS: Dict[str, CommandHandler] = {
    "bnext": partial(_switch, step=1),
    "bn": partial(_switch, step=1),
    "bprevious": partial(_switch, step=-1),
    "bprev": partial(_switch, step=-1),
    "bp": partial(_switch, step=-1),
    "bNext": partial(_switch, step=-1),
    "Explore": _explore,
    "Ex": _explore,
    "nohlsearch": _nohlsearch,
    "noh": _nohlsearch,
    "colorscheme": _colorscheme,
    "colo": _colorscheme,
    "mkview": _mkview,
    "mkvie": _mkview,
    "loadview": _loadview,
    "lo": _loadview,
    "echo": _echo,
}


__all__ = ["BUILTIN_COLORSCHEMES", "CommandHandler", "CommandTable"]
