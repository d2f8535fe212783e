"""Textual-free table model behind the inspector app."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional, Tuple

from vim_init.keymaps import Binding
from vim_init.startup import StartupResult


@dataclass(frozen=True, slots=True)
class Row:
    cells: Tuple[str, ...]
    key: str = ""


@dataclass(slots=True)
class Section:
    """One tab of the inspector: column titles plus rows."""

    title: str
    columns: Tuple[str, ...]
    rows: list[Row] = field(default_factory=list)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "on" if value else "off"
    if isinstance(value, tuple):
        return ",".join(str(part) for part in value)
    return str(value)


def _binding_action(binding: Binding) -> str:
    rhs = binding.action.rhs
    command = getattr(rhs, "command", None)
    if isinstance(command, str):
        return f":{command}"
    name = getattr(rhs, "name", None)
    if isinstance(name, str):
        return f"{name}()"
    return binding.action.label


class InspectorModel:
    """Builds the options, keymaps, autocmds and plugins sections."""

    SECTIONS = ("options", "keymaps", "autocmds", "plugins")

    def __init__(
        self,
        result: StartupResult,
        *,
        on_status: Callable[[str], None] = _noop,
    ) -> None:
        self.result = result
        self.on_status = on_status
        self._sections: Dict[str, Section] = {}

    def section(self, name: str) -> Section:
        if name not in self.SECTIONS:
            raise KeyError(f"Unknown section: {name}")
        cached = self._sections.get(name)
        if cached is None:
            cached = getattr(self, f"_build_{name}")()
            self._sections[name] = cached
        return cached

    def sections(self) -> Iterable[Section]:
        return [self.section(name) for name in self.SECTIONS]

    def refresh(self) -> None:
        self._sections.clear()
        self.on_status(self.status_line())

    def status_line(self) -> str:
        host = self.result.host
        parts = [
            f"{len(self.result.applied_options)} options",
            f"{host.keymaps.stats().binding_count} keymaps",
            f"colorscheme {host.colorscheme}",
        ]
        if self.result.report is not None:
            report = self.result.report
            parts.append(f"{len(report.loaded())}/{len(report.order)} plugins")
        if host.errors:
            parts.append(f"{len(host.errors)} errors")
        return " | ".join(parts)

    def find(self, section: str, key: str) -> Optional[Row]:
        for row in self.section(section).rows:
            if row.key == key:
                return row
        return None

    def _build_options(self) -> Section:
        store = self.result.host.options
        changed = store.changed()
        section = Section("Options", ("name", "value", "source"))
        for name, value in sorted(store.snapshot().items()):
            source = "config" if name in changed else "default"
            section.rows.append(Row((name, _format_value(value), source), key=name))
        return section

    def _build_keymaps(self) -> Section:
        section = Section("Keymaps", ("mode", "lhs", "action", "scope", "desc"))
        bindings = sorted(
            self.result.host.keymaps.all_bindings(),
            key=lambda b: (b.buffer or 0, b.mode, b.lhs),
        )
        for binding in bindings:
            scope = "global" if binding.buffer is None else f"buf {binding.buffer}"
            section.rows.append(
                Row(
                    (
                        binding.mode,
                        binding.lhs,
                        _binding_action(binding),
                        scope,
                        binding.description,
                    ),
                    key=f"{binding.mode}:{binding.lhs}:{binding.buffer or ''}",
                )
            )
        return section

    def _build_autocmds(self) -> Section:
        section = Section("Autocmds", ("id", "event", "pattern", "handler"))
        for autocmd in self.result.host.autocmds.get_autocmds():
            handler = autocmd.command or autocmd.desc or "<callback>"
            section.rows.append(
                Row(
                    (str(autocmd.id), autocmd.event, autocmd.pattern, handler),
                    key=str(autocmd.id),
                )
            )
        return section

    def _build_plugins(self) -> Section:
        section = Section("Plugins", ("plugin", "status", "phase", "error"))
        report = self.result.report
        if report is None:
            return section
        for name, state in report.states.items():
            section.rows.append(
                Row(
                    (name, state.status, state.phase, str(state.error or "")),
                    key=name,
                )
            )
        return section


__all__ = ["InspectorModel", "Row", "Section"]
