"""Lifecycle event subscriptions."""

from .registry import (
    BUF_ENTER,
    BUF_LEAVE,
    BUF_WIN_ENTER,
    BUF_WIN_LEAVE,
    KNOWN_EVENTS,
    LSP_ATTACH,
    VIM_ENTER,
    Autocmd,
    AutocmdCallback,
    AutocmdEvent,
    AutocmdFailure,
    AutocmdRegistry,
)
from .registrar import AutocmdDecl, apply_autocmds

__all__ = [
    "AutocmdDecl",
    "apply_autocmds",
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
