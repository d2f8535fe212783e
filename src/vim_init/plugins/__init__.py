"""Package-manager bootstrap and plugin declaration."""

from .bootstrap import (
    LAZY_BRANCH,
    LAZY_REPO,
    default_manager_path,
    ensure_plugin_manager,
    prepend_runtimepath,
)
from .git_ops import CommandRunner, clone, clone_command, subprocess_runner
from .manager import (
    GitInstaller,
    InstallResult,
    LoadReport,
    MemoryInstaller,
    PluginContext,
    PluginManager,
    PluginState,
)
from .modules import ModuleTable, PluginFunction, PluginModule, deep_extend
from .specs import PluginSpec, coerce_spec, merge_specs

__all__ = [
    "LAZY_BRANCH",
    "LAZY_REPO",
    "CommandRunner",
    "GitInstaller",
    "InstallResult",
    "LoadReport",
    "MemoryInstaller",
    "ModuleTable",
    "PluginContext",
    "PluginFunction",
    "PluginManager",
    "PluginModule",
    "PluginSpec",
    "PluginState",
    "clone",
    "clone_command",
    "coerce_spec",
    "deep_extend",
    "default_manager_path",
    "ensure_plugin_manager",
    "merge_specs",
    "prepend_runtimepath",
    "subprocess_runner",
]
