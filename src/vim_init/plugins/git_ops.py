"""
Git operations used to fetch the package manager and plugins.

All subprocess calls go through a ``runner`` so tests can substitute a
fake and inspect the exact argv.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Optional, Sequence

from vim_init.errors import GitError

CommandRunner = Callable[[Sequence[str]], "subprocess.CompletedProcess[str]"]


def subprocess_runner(cmd: Sequence[str]) -> "subprocess.CompletedProcess[str]":
    """Run ``cmd`` synchronously, capturing output; no timeout, no retry."""

    return subprocess.run(
        list(cmd),
        capture_output=True,
        text=True,
        check=False,
    )


def clone_command(
    repo_url: str,
    target_dir: Path,
    *,
    branch: Optional[str] = None,
    partial: bool = True,
    shallow: bool = False,
) -> list[str]:
    """
    Build the ``git clone`` argv.

    Args:
        repo_url: Git repository URL
        target_dir: Directory to clone into
        branch: Branch or tag to check out
        partial: Use a blobless partial clone (``--filter=blob:none``)
        shallow: Only fetch the tip commit (``--depth 1``)
    """
    cmd = ["git", "clone"]
    if partial:
        cmd.append("--filter=blob:none")
    if branch:
        cmd.append(f"--branch={branch}")
    if shallow:
        cmd.extend(["--depth", "1"])
    cmd.extend([repo_url, str(target_dir)])
    return cmd


def clone(
    repo_url: str,
    target_dir: Path,
    *,
    branch: Optional[str] = None,
    partial: bool = True,
    shallow: bool = False,
    runner: Optional[CommandRunner] = None,
) -> None:
    """
    Clone a repository into ``target_dir``.

    Raises:
        GitError: If git is missing or exits non-zero
    """
    run = runner or subprocess_runner
    cmd = clone_command(
        repo_url, target_dir, branch=branch, partial=partial, shallow=shallow
    )
    target_dir.parent.mkdir(parents=True, exist_ok=True)
    try:
        result = run(cmd)
    except FileNotFoundError as exc:
        raise GitError("git command not found. Please install git.") from exc
    except OSError as exc:
        raise GitError(f"Failed to clone repository: {exc}") from exc

    if result.returncode != 0:
        detail = (result.stderr or result.stdout or "").strip()
        raise GitError(
            f"Failed to clone {repo_url}: {detail}", returncode=result.returncode
        )


__all__ = ["CommandRunner", "clone", "clone_command", "subprocess_runner"]
