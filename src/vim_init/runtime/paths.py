"""Standard directory lookup and path expansion."""

from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "nvim"

_XDG_DEFAULTS = {
    "data": ("XDG_DATA_HOME", ".local/share"),
    "config": ("XDG_CONFIG_HOME", ".config"),
    "state": ("XDG_STATE_HOME", ".local/state"),
    "cache": ("XDG_CACHE_HOME", ".cache"),
}


def home_dir() -> Path:
    return Path(os.environ.get("HOME") or Path.home())


def stdpath(kind: str) -> Path:
    """Return the per-user directory for ``kind`` (``data``, ``config``...)."""

    if kind == "data":
        override = os.environ.get("VIM_INIT_DATA_DIR")
        if override:
            return Path(override)
    try:
        env_name, fallback = _XDG_DEFAULTS[kind]
    except KeyError as exc:
        raise ValueError(f"Unknown stdpath kind '{kind}'") from exc
    base = os.environ.get(env_name)
    root = Path(base) if base else home_dir() / fallback
    return root / APP_NAME


def expand_path(value: str) -> str:
    """Expand ``~`` and ``$VAR`` references; unknown variables are kept."""

    return os.path.expanduser(os.path.expandvars(value))


__all__ = ["APP_NAME", "home_dir", "stdpath", "expand_path"]
