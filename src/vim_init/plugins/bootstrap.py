"""Makes sure the package manager is on disk before plugins are declared."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

from vim_init.errors import BootstrapError, GitError
from vim_init.runtime import telemetry
from vim_init.runtime.paths import stdpath

from .git_ops import CommandRunner, clone

if TYPE_CHECKING:  # pragma: no cover
    from vim_init.host import HostContext

LAZY_REPO = "https://github.com/folke/lazy.nvim.git"
LAZY_BRANCH = "stable"


def default_manager_path() -> Path:
    return stdpath("data") / "lazy" / "lazy.nvim"


def ensure_plugin_manager(
    path: Path,
    *,
    repo: str = LAZY_REPO,
    branch: str = LAZY_BRANCH,
    runner: Optional[CommandRunner] = None,
) -> bool:
    """Clone the package manager into ``path`` unless it already exists.

    Returns ``True`` when a clone was made. At most one clone is attempted;
    a failure raises :class:`BootstrapError`.
    """

    with telemetry.span(
        "plugins::bootstrap",
        component="plugins",
        metadata={"path": str(path), "repo": repo},
    ) as handle:
        if path.exists():
            handle.add_metadata("status", "present")
            return False
        try:
            clone(repo, path, branch=branch, partial=True, runner=runner)
        except GitError as exc:
            raise BootstrapError(str(exc), returncode=exc.returncode) from exc
        handle.add_metadata("status", "cloned")
        return True


def prepend_runtimepath(host: "HostContext", path: Path) -> None:
    entry = str(path)
    if entry in host.runtimepath:
        host.runtimepath.remove(entry)
    host.runtimepath.insert(0, entry)


__all__ = [
    "LAZY_BRANCH",
    "LAZY_REPO",
    "default_manager_path",
    "ensure_plugin_manager",
    "prepend_runtimepath",
]
