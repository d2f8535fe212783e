"""Declarative startup configuration for a Vim-like host."""

__all__ = [
    "adapters",
    "autocmds",
    "config",
    "errors",
    "host",
    "keymaps",
    "options",
    "plugins",
    "runtime",
    "startup",
]

__version__ = "0.1.0"
