"""Global key bindings and the buffer-local LSP set."""

from __future__ import annotations

from vim_init.keymaps import ExCommand, HostFunction, KeymapDecl

ALL = ""
NORMAL = "n"

KEYMAPS: tuple[KeymapDecl, ...] = (
    # arrow keys do nothing
    KeymapDecl(ALL, "<Up>", "<NOP>"),
    KeymapDecl(ALL, "<Down>", "<NOP>"),
    KeymapDecl(ALL, "<Left>", "<NOP>"),
    KeymapDecl(ALL, "<Right>", "<NOP>"),
    KeymapDecl(NORMAL, "<Tab>", ExCommand("bnext"), "Switch to next buffer"),
    KeymapDecl(NORMAL, "<S-Tab>", ExCommand("bprevious"), "Switch to previous buffer"),
    KeymapDecl(NORMAL, "<leader>E", ExCommand("Explore"), "[E]xplore"),
    KeymapDecl(
        NORMAL, "<leader><backspace>", "<cmd>nohlsearch<CR>", "Clear search highlights"
    ),
    KeymapDecl(
        NORMAL,
        "K",
        "k_DjA <ESC>pkdd",
        "Join the line above to the end of current line",
    ),
    KeymapDecl(NORMAL, "<C-h>", "<C-w><C-h>", "Move focus to the left window"),
    KeymapDecl(NORMAL, "<C-l>", "<C-w><C-l>", "Move focus to the right window"),
    KeymapDecl(NORMAL, "<C-j>", "<C-w><C-j>", "Move focus to the lower window"),
    KeymapDecl(NORMAL, "<C-k>", "<C-w><C-k>", "Move focus to the upper window"),
    KeymapDecl(ALL, "<leader>y", '"+y', "y to system clipboard"),
    KeymapDecl(ALL, "<leader>Y", '"+Y', "Y to system clipboard"),
    KeymapDecl(ALL, "<leader>p", '"+p', "p from system clipboard"),
    KeymapDecl(ALL, "<leader>P", '"+P', "P from system clipboard"),
    KeymapDecl(ALL, "<leader>d", '"_d', "d to null register"),
    KeymapDecl(ALL, "<leader>x", '"_x', "x to null register"),
)

LSP_KEYMAPS: tuple[KeymapDecl, ...] = (
    KeymapDecl(
        NORMAL, "gd", HostFunction("lsp.buf.definition"), "[G]o to symbol [d]efinition"
    ),
    KeymapDecl(
        NORMAL, "<leader>rn", HostFunction("lsp.buf.rename"), "[R]e[n]ame symbol"
    ),
    KeymapDecl(
        NORMAL, "<leader>f", HostFunction("lsp.buf.format"), "[F]ormat buffer"
    ),
    KeymapDecl(
        NORMAL, "<leader>h", HostFunction("lsp.buf.hover"), "[H]over symbol under cursor"
    ),
    KeymapDecl(
        NORMAL,
        "<leader>l",
        HostFunction("diagnostic.open_float"),
        "Open diagnostic [l]ogs on current line",
    ),
)

__all__ = ["KEYMAPS", "LSP_KEYMAPS"]
