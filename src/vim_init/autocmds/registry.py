"""Autocommand registry: subscriptions to host lifecycle events."""

from __future__ import annotations

from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, Mapping, Optional

from vim_init.runtime import telemetry

if TYPE_CHECKING:  # pragma: no cover
    from vim_init.host import HostContext

BUF_WIN_ENTER = "BufWinEnter"
BUF_WIN_LEAVE = "BufWinLeave"
BUF_ENTER = "BufEnter"
BUF_LEAVE = "BufLeave"
LSP_ATTACH = "LspAttach"
VIM_ENTER = "VimEnter"

KNOWN_EVENTS = frozenset(
    {BUF_WIN_ENTER, BUF_WIN_LEAVE, BUF_ENTER, BUF_LEAVE, LSP_ATTACH, VIM_ENTER}
)


@dataclass(frozen=True, slots=True)
class AutocmdEvent:
    """Payload handed to autocommand callbacks."""

    event: str
    match: str = ""
    buf: Optional[int] = None
    data: Mapping[str, Any] = field(default_factory=dict)
    host: Optional["HostContext"] = None
    id: int = 0
    group: Optional[int] = None


AutocmdCallback = Callable[[AutocmdEvent], object]


@dataclass(slots=True)
class Autocmd:
    """One registered handler."""

    id: int
    event: str
    pattern: str
    group: Optional[int]
    callback: Optional[AutocmdCallback] = None
    command: Optional[str] = None
    once: bool = False
    desc: str = ""

    def matches(self, match: str) -> bool:
        if self.pattern == "*":
            return True
        return fnmatchcase(match, self.pattern)


@dataclass(frozen=True, slots=True)
class AutocmdFailure:
    """A handler that raised; kept so the host can surface it later."""

    autocmd_id: int
    event: str
    error: BaseException


class AutocmdRegistry:
    """Runs handlers in registration order, synchronously, once per event.

    Command handlers are delegated to ``command_runner``; a handler that
    raises is logged and recorded, and the remaining handlers still run.
    """

    def __init__(
        self,
        *,
        command_runner: Callable[[str], object] | None = None,
        host: Optional["HostContext"] = None,
        logger_name: str | None = None,
    ) -> None:
        self._autocmds: list[Autocmd] = []
        self._groups: Dict[str, int] = {}
        self._next_id = 1
        self._command_runner = command_runner
        self._host = host
        self._logger_name = logger_name
        self.failures: list[AutocmdFailure] = []

    def create_augroup(self, name: str, *, clear: bool = True) -> int:
        if not name:
            raise ValueError("augroup name cannot be empty")
        group_id = self._groups.get(name)
        if group_id is None:
            group_id = self._allocate_id()
            self._groups[name] = group_id
        elif clear:
            self._autocmds = [a for a in self._autocmds if a.group != group_id]
        return group_id

    def group_id(self, name: str) -> int:
        try:
            return self._groups[name]
        except KeyError as exc:
            raise KeyError(f"Invalid augroup '{name}'") from exc

    def create_autocmd(
        self,
        events: str | Iterable[str],
        *,
        pattern: str | Iterable[str] = "*",
        group: int | str | None = None,
        callback: AutocmdCallback | None = None,
        command: str | None = None,
        once: bool = False,
        desc: str = "",
    ) -> int:
        """Register a handler and return its id.

        One handler id covers every (event, pattern) combination given.
        """

        if (callback is None) == (command is None):
            raise ValueError("Provide exactly one of `callback` or `command`")
        if callback is not None and not callable(callback):
            raise TypeError("callback must be callable")
        event_names = [events] if isinstance(events, str) else list(events)
        patterns = [pattern] if isinstance(pattern, str) else list(pattern)
        if not event_names or not patterns:
            raise ValueError("events and pattern cannot be empty")
        group_id = self.group_id(group) if isinstance(group, str) else group

        autocmd_id = self._allocate_id()
        with telemetry.span(
            "autocmds::create",
            logger_name=self._logger_name,
            component="autocmds",
            metadata={"events": ",".join(event_names), "id": autocmd_id},
        ):
            for event in event_names:
                if event not in KNOWN_EVENTS:
                    telemetry.record_event(
                        "autocmds.unknown_event",
                        level="debug",
                        data={"event": event},
                        logger_name=self._logger_name,
                    )
                for pat in patterns:
                    self._autocmds.append(
                        Autocmd(
                            id=autocmd_id,
                            event=event,
                            pattern=pat,
                            group=group_id,
                            callback=callback,
                            command=command,
                            once=once,
                            desc=desc,
                        )
                    )
        return autocmd_id

    def delete_autocmd(self, autocmd_id: int) -> int:
        before = len(self._autocmds)
        self._autocmds = [a for a in self._autocmds if a.id != autocmd_id]
        return before - len(self._autocmds)

    def get_autocmds(
        self, *, event: str | None = None, group: int | str | None = None
    ) -> tuple[Autocmd, ...]:
        group_id = self.group_id(group) if isinstance(group, str) else group
        return tuple(
            autocmd
            for autocmd in self._autocmds
            if (event is None or autocmd.event == event)
            and (group_id is None or autocmd.group == group_id)
        )

    def exec_autocmds(
        self,
        event: str,
        *,
        match: str = "",
        buf: Optional[int] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> int:
        """Fire ``event`` and return how many handlers ran."""

        # Snapshot first: handlers may register or delete autocmds. One id
        # fires at most once per occurrence, whatever its pattern count.
        selected: Dict[int, Autocmd] = {}
        for candidate in self._autocmds:
            if candidate.event == event and candidate.matches(match):
                selected.setdefault(candidate.id, candidate)
        fired = 0
        with telemetry.span(
            "autocmds::exec",
            logger_name=self._logger_name,
            component="autocmds",
            metadata={"event": event, "match": match},
        ) as handle:
            for autocmd in selected.values():
                if not self._is_registered(autocmd):
                    continue
                if autocmd.once:
                    self.delete_autocmd(autocmd.id)
                payload = AutocmdEvent(
                    event=event,
                    match=match,
                    buf=buf,
                    data=dict(data or {}),
                    host=self._host,
                    id=autocmd.id,
                    group=autocmd.group,
                )
                fired += 1
                try:
                    self._run(autocmd, payload)
                except Exception as exc:
                    handle.warn(f"autocmd {autocmd.id} failed: {exc}")
                    self.failures.append(AutocmdFailure(autocmd.id, event, exc))
            handle.add_metadata("fired", fired)
        return fired

    def _is_registered(self, autocmd: Autocmd) -> bool:
        return any(row is autocmd for row in self._autocmds)

    def _run(self, autocmd: Autocmd, payload: AutocmdEvent) -> None:
        if autocmd.callback is not None:
            autocmd.callback(payload)
            return
        if self._command_runner is None:
            raise RuntimeError("No command runner configured for autocmd commands")
        assert autocmd.command is not None
        self._command_runner(autocmd.command)

    def _allocate_id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def __len__(self) -> int:
        return len(self._autocmds)


__all__ = [
    "Autocmd",
    "AutocmdCallback",
    "AutocmdEvent",
    "AutocmdFailure",
    "AutocmdRegistry",
    "BUF_ENTER",
    "BUF_LEAVE",
    "BUF_WIN_ENTER",
    "BUF_WIN_LEAVE",
    "KNOWN_EVENTS",
    "LSP_ATTACH",
    "VIM_ENTER",
]
