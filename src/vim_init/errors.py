"""Exception hierarchy shared by every startup component."""

from __future__ import annotations

from typing import Iterable


class VimInitError(Exception):
    """Base class for errors raised while applying startup configuration."""


class UnknownOptionError(VimInitError, KeyError):
    """Raised when an option name is not in the host's catalogue."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown option '{self.name}'"


class OptionTypeError(VimInitError, TypeError):
    """Raised when a value cannot be coerced to the option's kind."""

    def __init__(self, name: str, kind: str, value: object) -> None:
        super().__init__(f"Option '{name}' expects {kind}, got {value!r}")
        self.name = name
        self.kind = kind
        self.value = value


class UnknownCommandError(VimInitError, KeyError):
    """Raised when an ex command line names no registered command."""

    def __init__(self, command: str) -> None:
        super().__init__(command)
        self.command = command

    def __str__(self) -> str:
        return f"Not an editor command: {self.command}"


class GitError(VimInitError, RuntimeError):
    """Raised when a git subprocess fails or git is missing."""

    def __init__(self, message: str, *, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class BootstrapError(GitError):
    """Raised when the package manager could not be cloned."""


class PluginSpecError(VimInitError, ValueError):
    """Raised for malformed plugin declarations or dependency cycles."""

    def __init__(self, message: str, *, plugins: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.plugins = tuple(plugins)


class PluginNotLoadedError(VimInitError, LookupError):
    """Raised by ``require`` when no loaded plugin provides a module."""

    def __init__(self, module: str) -> None:
        super().__init__(f"module '{module}' not found")
        self.module = module


__all__ = [
    "VimInitError",
    "UnknownOptionError",
    "OptionTypeError",
    "UnknownCommandError",
    "GitError",
    "BootstrapError",
    "PluginSpecError",
    "PluginNotLoadedError",
]
