"""View persistence and LSP attach hooks."""

from __future__ import annotations

from vim_init.autocmds import (
    BUF_WIN_ENTER,
    BUF_WIN_LEAVE,
    LSP_ATTACH,
    AutocmdDecl,
    AutocmdEvent,
)
from vim_init.keymaps import apply_keymaps

from .keymaps import LSP_KEYMAPS

AUGROUP = "vimrc_augroup"


def on_lsp_attach(event: AutocmdEvent) -> None:
    """Install the LSP bindings local to the attached buffer."""

    if event.host is None or event.buf is None:
        raise ValueError("LspAttach needs a host and a buffer")
    apply_keymaps(event.host, LSP_KEYMAPS, buffer=event.buf)


AUTOCMDS: tuple[AutocmdDecl, ...] = (
    # Restore cursor and folds on enter, save them on leave.
    AutocmdDecl(BUF_WIN_ENTER, "*.*", command="silent! loadview"),
    AutocmdDecl(BUF_WIN_LEAVE, "*.*", command="mkview"),
    AutocmdDecl(LSP_ATTACH, callback=on_lsp_attach, desc="LSP keymaps"),
)

__all__ = ["AUGROUP", "AUTOCMDS", "on_lsp_attach"]
