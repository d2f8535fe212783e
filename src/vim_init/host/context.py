"""The host: owner of every registry startup writes into."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from vim_init.autocmds import (
    BUF_WIN_ENTER,
    BUF_WIN_LEAVE,
    LSP_ATTACH,
    AutocmdRegistry,
)
from vim_init.keymaps import (
    Binding,
    KeymapRegistry,
    KeymapResolver,
    expand_modes,
    parse_keys,
)
from vim_init.options import DEFAULT_CATALOGUE, OptionSpec, OptionStore, find_matches
from vim_init.plugins.modules import ModuleTable, PluginModule
from vim_init.runtime import telemetry

from .buffers import BufferInfo, BufferList, ViewStore
from .commands import CommandTable


@dataclass(frozen=True, slots=True)
class KeymapInvocation:
    """Context passed to callable key bindings when they fire."""

    host: "HostContext"
    binding: Binding
    buffer: Optional[int]


@dataclass(slots=True)
class DispatchResult:
    """Outcome of :meth:`HostContext.feed_keys`."""

    status: str
    binding: Optional[Binding] = None
    value: object = None
    next_expected: tuple[str, ...] = ()


@dataclass(slots=True)
class HostCall:
    """A call into host or plugin functionality recorded for inspection."""

    name: str
    args: tuple = ()
    kwargs: Dict[str, Any] = field(default_factory=dict)


class HostContext:
    """Explicit, owned host state passed through startup.

    Nothing here is module-global, so tests build as many isolated hosts as
    they need.
    """

    def __init__(
        self,
        *,
        option_catalogue: Mapping[str, OptionSpec] = DEFAULT_CATALOGUE,
        view_dir: str | Path | None = None,
        logger_name: str | None = None,
    ) -> None:
        self.logger_name = logger_name
        self.globals: Dict[str, object] = {}
        self.options = OptionStore(option_catalogue, logger_name=logger_name)
        self.keymaps = KeymapRegistry(leader=self.leader, logger_name=logger_name)
        self.resolver = KeymapResolver(self.keymaps, logger_name=logger_name)
        self.commands = CommandTable(self)
        self.autocmds = AutocmdRegistry(
            command_runner=self.run_command, host=self, logger_name=logger_name
        )
        self.buffers = BufferList()
        self.views = ViewStore(view_dir)
        self.runtimepath: list[str] = []
        self.modules = ModuleTable()
        self.diagnostics: Dict[str, Any] = {}
        self.lsp_handlers: Dict[str, Dict[str, Any]] = {}
        self.lsp_capabilities: Dict[str, Any] = {
            "textDocument": {"completion": {"completionItem": {"snippetSupport": False}}}
        }
        self.colorschemes: set[str] = set()
        self.colorscheme = "default"
        self.search_highlight = True
        self.messages: list[str] = []
        self.errors: list[BaseException] = []
        self.fed_keys: list[tuple[str, str]] = []
        self.calls: list[HostCall] = []

    # -- registries -----------------------------------------------------

    def leader(self) -> str:
        value = self.globals.get("mapleader", "\\")
        return str(value) if value else "\\"

    def require(self, name: str) -> PluginModule:
        return self.modules.require(name)

    def new_module(self, name: str, *, plugin: str = "") -> PluginModule:
        return self.modules.register(
            PluginModule(name, plugin=plugin, recorder=self.record_call)
        )

    def run_command(self, line: str) -> object:
        return self.commands.run(line)

    def record_call(self, name: str, args: tuple, kwargs: dict) -> None:
        self.calls.append(HostCall(name=name, args=args, kwargs=dict(kwargs)))
        telemetry.record_event(
            "host.call", level="debug", data={"name": name}, logger_name=self.logger_name
        )

    def echo(self, message: str) -> None:
        self.messages.append(message)

    def report_error(self, error: BaseException) -> None:
        """Log an error surfaced during startup and keep going."""

        self.errors.append(error)
        telemetry.record_event(
            "host.error",
            level="warning",
            data={"type": type(error).__name__, "error": str(error)},
            logger_name=self.logger_name,
        )

    # -- buffers and events --------------------------------------------

    def open_buffer(self, name: str) -> BufferInfo:
        existing = self.buffers.find(name)
        info = existing or self.buffers.add(name)
        return self.switch_buffer(info.id, force_enter=existing is None)

    def switch_buffer(self, buffer_id: int, *, force_enter: bool = False) -> BufferInfo:
        """Make ``buffer_id`` current, firing BufWinLeave/BufWinEnter."""

        previous = self.buffers.current
        if previous is not None and previous.id == buffer_id and not force_enter:
            return previous
        if previous is not None and previous.id != buffer_id:
            self.autocmds.exec_autocmds(
                BUF_WIN_LEAVE, match=previous.name, buf=previous.id
            )
        info = self.buffers.set_current(buffer_id)
        self.autocmds.exec_autocmds(BUF_WIN_ENTER, match=info.name, buf=info.id)
        return info

    def attach_lsp(self, buffer_id: int, *, client: str = "lsp") -> int:
        info = self.buffers.get(buffer_id)
        return self.autocmds.exec_autocmds(
            LSP_ATTACH,
            match=info.name,
            buf=buffer_id,
            data={"client": client},
        )

    def search(self, pattern: str, lines: list[str]) -> list[tuple[int, int]]:
        matches = list(find_matches(lines, pattern, self.options))
        self.search_highlight = bool(self.options.get("hlsearch"))
        return matches

    # -- key dispatch ---------------------------------------------------

    def feed_keys(
        self, mode: str, lhs: str, *, buffer: Optional[int] = None
    ) -> DispatchResult:
        """Resolve ``lhs`` in ``mode`` and run the bound action."""

        mode = expand_modes(mode)[0]
        if buffer is None and self.buffers.current is not None:
            buffer = self.buffers.current.id
        tokens = parse_keys(lhs, leader=self.leader()).tokens
        result = self.resolver.resolve(mode, tokens, buffer=buffer)
        if result.status != "match" or result.binding is None:
            return DispatchResult(
                status=result.status, next_expected=result.next_expected
            )
        binding = result.binding
        value = self._invoke(binding, buffer)
        return DispatchResult(status="match", binding=binding, value=value)

    def _invoke(self, binding: Binding, buffer: Optional[int]) -> object:
        action = binding.action
        kind = action.kind
        with telemetry.span(
            "host::invoke",
            logger_name=self.logger_name,
            component="keymaps",
            metadata={"mode": binding.mode, "lhs": binding.lhs, "kind": kind},
        ):
            if kind == "callable":
                handler: Callable[..., object] = action.rhs  # type: ignore[assignment]
                return handler(KeymapInvocation(self, binding, buffer))
            if kind == "nop":
                return None
            if kind == "command":
                return self.run_command(action.command)
            assert isinstance(action.rhs, str)
            self.fed_keys.append((binding.mode, action.rhs))
            return action.rhs


__all__ = ["DispatchResult", "HostCall", "HostContext", "KeymapInvocation"]
