"""The declared configuration: plain data applied by :mod:`vim_init.startup`."""

from .autocmds import AUGROUP, AUTOCMDS
from .keymaps import KEYMAPS, LSP_KEYMAPS
from .options import DIAGNOSTIC_CONFIG, GLOBALS, LSP_HANDLERS, OPTIONS
from .plugins import PLUGINS

__all__ = [
    "AUGROUP",
    "AUTOCMDS",
    "DIAGNOSTIC_CONFIG",
    "GLOBALS",
    "KEYMAPS",
    "LSP_HANDLERS",
    "LSP_KEYMAPS",
    "OPTIONS",
    "PLUGINS",
]
