"""Editing options and global variables applied first at startup."""

from __future__ import annotations

from typing import Any, Dict

from vim_init.options import Option

TAB_WIDTH = 4

GLOBALS: Dict[str, object] = {
    "mapleader": " ",
    "maplocalleader": " ",
    "have_nerd_font": False,
}

OPTIONS: tuple[Option, ...] = (
    Option("backspace", "indent,eol,start"),
    Option("mouse", "a"),
    # search: case-insensitive unless the pattern has capitals
    Option("ignorecase", True),
    Option("smartcase", True),
    Option("swapfile", False),
    Option("backup", False),
    Option("undodir", "$HOME/.vim/undodir"),
    Option("undofile", True),
    Option("termguicolors", True),
    Option("colorcolumn", (80, 120)),
    Option("tabstop", TAB_WIDTH),
    Option("shiftwidth", TAB_WIDTH),
    Option("softtabstop", 0),
    Option("expandtab", True),
    Option("autoindent", True),
    Option("smartindent", True),
    Option("wrap", False),
    Option("breakindent", True),
    Option("foldmethod", "expr"),
    Option("foldexpr", "v:lua.vim.treesitter.foldexpr()"),
    Option("foldenable", False),
    Option("relativenumber", True),
    Option("number", True),
    Option("signcolumn", "yes"),
    Option("hlsearch", True),
    Option("cursorline", True),
    Option("scrolloff", 12),
    Option("splitright", True),
    Option("splitbelow", True),
)

DIAGNOSTIC_CONFIG: Dict[str, Any] = {"float": {"border": "rounded"}}

LSP_HANDLERS: Dict[str, Dict[str, Any]] = {
    "textDocument/hover": {"border": "rounded"},
}

__all__ = ["DIAGNOSTIC_CONFIG", "GLOBALS", "LSP_HANDLERS", "OPTIONS", "TAB_WIDTH"]
