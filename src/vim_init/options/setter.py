"""Applies declared options and global variables to a host."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Mapping

from vim_init.errors import OptionTypeError, UnknownOptionError
from vim_init.runtime import telemetry

from .models import Option

if TYPE_CHECKING:  # pragma: no cover
    from vim_init.host import HostContext


def apply_globals(host: "HostContext", variables: Mapping[str, object]) -> None:
    """Write ``vim.g``-style variables; no validation happens here."""

    with telemetry.span(
        "startup::globals", component="options", metadata={"count": len(variables)}
    ):
        for name, value in variables.items():
            host.globals[name] = value


def apply_options(host: "HostContext", options: Iterable[Option]) -> list[str]:
    """Apply each option in order and return the names that were accepted.

    Unknown names and ill-typed values are logged and skipped so the rest
    of startup still runs.
    """

    applied: list[str] = []
    with telemetry.span("startup::options", component="options") as handle:
        for option in options:
            try:
                host.options.set(option.name, option.value)
            except (UnknownOptionError, OptionTypeError) as exc:
                handle.warn(str(exc))
                host.report_error(exc)
                continue
            applied.append(option.name)
        handle.add_metadata("applied", len(applied))
    return applied


__all__ = ["apply_globals", "apply_options"]
