"""Command-line entry point: run startup against a fresh host and report."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Optional, Sequence

from vim_init.host import HostContext
from vim_init.plugins import MemoryInstaller, default_manager_path
from vim_init.runtime import telemetry
from vim_init.startup import StartupResult, run_startup


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="vim-init",
        description="Apply the editor startup configuration and summarise it.",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding lazy/ (default: stdpath('data'))",
    )
    parser.add_argument(
        "--no-bootstrap",
        action="store_true",
        help="Do not clone the package manager when it is missing",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve plugins without touching git or the filesystem",
    )
    parser.add_argument(
        "--inspect",
        action="store_true",
        help="Browse the resulting options, keymaps and plugins in a Textual UI",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=os.environ.get("VIM_INIT_LOG_PRESET") or None,
        help="Telemetry preset (default: configured from VIM_INIT_* variables)",
    )
    args = parser.parse_args(argv)
    if args.log_preset and args.log_preset not in telemetry.PRESETS:
        parser.error(
            f"VIM_INIT_LOG_PRESET must be one of {', '.join(telemetry.PRESETS)}, "
            f"got '{args.log_preset}'"
        )
    return args


def summarize(result: StartupResult) -> list[str]:
    host = result.host
    lines = [
        f"options: {len(result.applied_options)} applied",
        f"keymaps: {host.keymaps.stats().binding_count} bindings",
        f"autocmds: {len(host.autocmds)} registered",
    ]
    if result.bootstrap_error is not None:
        lines.append(f"bootstrap: failed ({result.bootstrap_error})")
    elif result.bootstrapped is not None:
        outcome = "cloned" if result.bootstrapped else "present"
        lines.append(f"bootstrap: {outcome}")
    if result.report is not None:
        for name, state in result.report.states.items():
            detail = f" [{state.phase}: {state.error}]" if state.error else ""
            lines.append(f"plugin {name}: {state.status}{detail}")
    lines.append(f"colorscheme: {host.colorscheme}")
    for error in host.errors:
        lines.append(f"error: {error}")
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)

    manager_path = default_manager_path()
    if args.data_dir is not None:
        manager_path = args.data_dir / "lazy" / "lazy.nvim"
    result = run_startup(
        HostContext(),
        bootstrap=not (args.no_bootstrap or args.dry_run),
        manager_path=manager_path,
        installer=MemoryInstaller() if args.dry_run else None,
    )
    for line in summarize(result):
        print(line)

    if args.inspect:
        from vim_init.adapters.textual.app import run_inspector

        run_inspector(result)
    return 0 if result.ok else 1


__all__ = ["main", "summarize"]
