"""Plugin declarations handed to the package manager."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Any, Dict, List

from vim_init.plugins import PluginSpec, deep_extend

if TYPE_CHECKING:  # pragma: no cover
    from vim_init.host import HostContext
    from vim_init.plugins import PluginContext

PLENARY = "nvim-lua/plenary.nvim"


def configure_treesitter(ctx: "PluginContext") -> None:
    ctx.require("nvim-treesitter.configs").setup(
        {
            "ensure_installed": ["lua", "vim", "vimdoc"],
            "sync_install": False,
            "auto_install": True,
            "highlight": {
                "enable": True,
                "additional_vim_regex_highlighting": False,
            },
            "indent": {"enable": True},
        }
    )
    ctx.host.commands.register("TSUpdate", _ts_update)


def _ts_update(host: "HostContext", args: List[str]) -> object:
    return host.record_call("nvim-treesitter.update", tuple(args), {})


def configure_telescope(ctx: "PluginContext") -> None:
    actions = ctx.require("telescope.actions")
    ctx.require("telescope").setup(
        {
            "defaults": {
                "mappings": {
                    "i": {
                        "<C-n>": actions.move_selection_next,
                        "<C-p>": actions.move_selection_previous,
                        "<C-y>": actions.select_default,
                        "<ESC>": actions.close,
                    }
                }
            }
        }
    )

    builtin = ctx.require("telescope.builtin")
    keymaps = ctx.host.keymaps
    keymaps.set(
        "n", "<leader>tf", builtin.find_files, desc="[T]elescope - Search [f]files"
    )
    keymaps.set("n", "<leader>tg", builtin.git_files, desc="[T]elescope - Search [g]it")
    keymaps.set(
        "n", "<leader>tb", builtin.buffers, desc="[T]elescope - Search [b]uffers"
    )
    keymaps.set(
        "n",
        "<leader>ts",
        partial(builtin.grep_string, search=""),
        desc="[T]elescope - Search [s]tring",
    )
    keymaps.set(
        "n", "<leader>tk", builtin.keymaps, desc="[T]elescope - Search [k]eymaps"
    )


def _setup_server(
    host: "HostContext", capabilities: Dict[str, Any], server_name: str
) -> object:
    return host.record_call(
        "lspconfig.setup", (server_name,), {"capabilities": capabilities}
    )


def configure_lsp(ctx: "PluginContext") -> None:
    # cmp_nvim_lsp.default_capabilities() turns on snippet completion items.
    capabilities = deep_extend(
        ctx.host.lsp_capabilities,
        {"textDocument": {"completion": {"completionItem": {"snippetSupport": True}}}},
    )

    ctx.require("mason").setup()
    ctx.require("mason-lspconfig").setup(
        {
            "ensure_installed": ["lua_ls"],
            "handlers": [partial(_setup_server, ctx.host, capabilities)],
        }
    )

    select = {"behavior": "select"}
    ctx.require("cmp").setup(
        {
            "snippet": {"expand": ctx.require("luasnip").lsp_expand},
            "mapping": {
                "<C-n>": ("select_next_item", select),
                "<Down>": ("select_next_item", select),
                "<C-p>": ("select_prev_item", select),
                "<Up>": ("select_prev_item", select),
                "<C-y>": ("confirm", {"select": True}),
            },
            "sources": [
                [{"name": "nvim_lsp"}, {"name": "luasnip"}],
                [{"name": "buffer"}],
            ],
        }
    )


def _section_location() -> str:
    return "%2l:%-2v"


def configure_mini(ctx: "PluginContext") -> None:
    ctx.require("mini.pairs").setup()

    statusline = ctx.require("mini.statusline")
    statusline.setup({"use_icons": bool(ctx.host.globals.get("have_nerd_font"))})
    statusline.section_location = _section_location
    # the statusline already shows the mode
    ctx.host.options.set("showmode", False)


def configure_gitsigns(ctx: "PluginContext") -> None:
    gitsigns = ctx.require("gitsigns")
    gitsigns.setup(
        {
            "signs": {
                "add": {"text": "+"},
                "change": {"text": "┃"},
                "delete": {"text": "-"},
                "topdelete": {"text": "-"},
                "changedelete": {"text": "~"},
                "untracked": {"text": "┆"},
            },
            "signcolumn": True,
            "watch_gitdir": {"follow_files": True},
            "current_line_blame": True,
            "current_line_blame_formatter": "<author>, <author_time:%Y-%m-%d> - <summary>",
        }
    )
    ctx.host.keymaps.set(
        "n", "<leader>g", gitsigns.preview_hunk_inline, desc="View git changes inline"
    )


def configure_colorscheme(ctx: "PluginContext") -> None:
    ctx.require("rose-pine").setup(
        {
            "variant": "main",
            "dark_variant": "main",
            "dim_inactive_windows": True,
            "extend_background_behind_borders": True,
            "enable": {"terminal": True},
            "styles": {"bold": True, "italic": True, "transparency": False},
        }
    )
    ctx.host.run_command("colorscheme rose-pine")


TODO_COMMENTS_OPTS: Dict[str, Any] = {
    "signs": False,
    "highlight": {
        "multiline": True,
        "multiline_pattern": "^.",
        "multiline_context": 10,
        "before": "fg",
        "keyword": "bg",
        "after": "fg",
        "pattern": r".*<(KEYWORDS)\s*",
        "comments_only": True,
        "max_line_len": 200,
        "exclude": [],
    },
}

PLUGINS: tuple[PluginSpec, ...] = (
    PluginSpec(
        "nvim-treesitter/nvim-treesitter",
        build=":TSUpdate",
        modules=("nvim-treesitter", "nvim-treesitter.configs"),
        config=configure_treesitter,
    ),
    PluginSpec(
        "nvim-telescope/telescope.nvim",
        tag="0.1.6",
        dependencies=(PLENARY,),
        modules=("telescope", "telescope.actions", "telescope.builtin"),
        config=configure_telescope,
    ),
    PluginSpec(
        "neovim/nvim-lspconfig",
        dependencies=(
            "williamboman/mason.nvim",
            "williamboman/mason-lspconfig.nvim",
            PluginSpec("hrsh7th/cmp-nvim-lsp", modules=("cmp_nvim_lsp",)),
            "hrsh7th/cmp-buffer",
            "hrsh7th/nvim-cmp",
            "L3MON4D3/LuaSnip",
        ),
        config=configure_lsp,
    ),
    PluginSpec(
        "echasnovski/mini.nvim",
        modules=("mini.pairs", "mini.statusline"),
        config=configure_mini,
    ),
    PluginSpec("lewis6991/gitsigns.nvim", config=configure_gitsigns),
    PluginSpec(
        "folke/todo-comments.nvim",
        dependencies=(PLENARY,),
        opts=TODO_COMMENTS_OPTS,
    ),
    PluginSpec(
        "rose-pine/neovim",
        name="rose-pine",
        colors=("rose-pine", "rose-pine-main", "rose-pine-moon", "rose-pine-dawn"),
        config=configure_colorscheme,
    ),
)

__all__ = ["PLUGINS", "TODO_COMMENTS_OPTS"]
