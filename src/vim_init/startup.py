"""One-shot startup: options, keymaps, autocmds, then plugins."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union

from vim_init import config
from vim_init.autocmds import AutocmdDecl, apply_autocmds
from vim_init.errors import BootstrapError, PluginSpecError
from vim_init.host import HostContext
from vim_init.keymaps import KeymapDecl, apply_keymaps
from vim_init.options import Option, apply_globals, apply_options
from vim_init.plugins import (
    CommandRunner,
    GitInstaller,
    LoadReport,
    PluginManager,
    PluginSpec,
    deep_extend,
    default_manager_path,
    ensure_plugin_manager,
    prepend_runtimepath,
)
from vim_init.plugins.manager import Installer
from vim_init.runtime import telemetry


@dataclass
class StartupResult:
    """What each startup phase did."""

    host: HostContext
    applied_options: list[str] = field(default_factory=list)
    keymap_count: int = 0
    autocmd_ids: list[int] = field(default_factory=list)
    bootstrapped: Optional[bool] = None
    bootstrap_error: Optional[BootstrapError] = None
    report: Optional[LoadReport] = None

    @property
    def ok(self) -> bool:
        if self.bootstrap_error is not None or self.host.errors:
            return False
        return self.report is None or not self.report.failed()


def apply_ui_tables(
    host: HostContext,
    *,
    diagnostics: Mapping[str, Any],
    lsp_handlers: Mapping[str, Mapping[str, Any]],
) -> None:
    host.diagnostics.update(deep_extend(host.diagnostics, diagnostics))
    for method, handler_opts in lsp_handlers.items():
        host.lsp_handlers[method] = deep_extend(
            host.lsp_handlers.get(method, {}), handler_opts
        )


def run_startup(
    host: Optional[HostContext] = None,
    *,
    variables: Mapping[str, object] = config.GLOBALS,
    options: Iterable[Option] = config.OPTIONS,
    diagnostics: Mapping[str, Any] = config.DIAGNOSTIC_CONFIG,
    lsp_handlers: Mapping[str, Dict[str, Any]] = config.LSP_HANDLERS,
    keymaps: Iterable[KeymapDecl] = config.KEYMAPS,
    autocmds: Iterable[AutocmdDecl] = config.AUTOCMDS,
    augroup: Optional[str] = config.AUGROUP,
    plugins: Sequence[Union[str, PluginSpec]] = config.PLUGINS,
    bootstrap: bool = True,
    manager_path: Optional[Path] = None,
    plugin_root: Optional[Path] = None,
    runner: Optional[CommandRunner] = None,
    installer: Optional[Installer] = None,
) -> StartupResult:
    """Apply the whole configuration to ``host`` (a fresh one if omitted).

    Options and keymaps are always in place before any plugin ``config``
    runs. A failed bootstrap is reported and declaration still happens.
    """

    host = host or HostContext()
    result = StartupResult(host=host)

    with telemetry.span("startup", component=True) as handle:
        apply_globals(host, variables)
        result.applied_options = apply_options(host, options)
        apply_ui_tables(host, diagnostics=diagnostics, lsp_handlers=lsp_handlers)
        result.keymap_count = apply_keymaps(host, keymaps)
        result.autocmd_ids = apply_autocmds(host, autocmds, group=augroup)

        manager_path = manager_path or default_manager_path()
        if bootstrap:
            try:
                result.bootstrapped = ensure_plugin_manager(
                    manager_path, runner=runner
                )
            except BootstrapError as exc:
                handle.fail(f"bootstrap failed: {exc}")
                result.bootstrap_error = exc
                host.report_error(exc)
        prepend_runtimepath(host, manager_path)

        if plugins:
            manager = PluginManager(
                host,
                root=plugin_root or manager_path.parent,
                installer=installer or GitInstaller(runner),
                unavailable=result.bootstrap_error,
            )
            try:
                result.report = manager.setup(plugins)
            except PluginSpecError as exc:
                handle.fail(str(exc))
                host.report_error(exc)

        handle.add_metadata("options", len(result.applied_options))
        handle.add_metadata("keymaps", result.keymap_count)
        if result.report is not None:
            handle.add_metadata("plugins", len(result.report.loaded()))

    telemetry.record_event(
        "startup.done",
        data={"ok": result.ok, "errors": len(host.errors)},
    )
    return result


__all__ = ["StartupResult", "apply_ui_tables", "run_startup"]
