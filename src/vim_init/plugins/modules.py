"""Loaded plugin modules as seen through ``require``.

Plugin internals are external; a :class:`PluginModule` only keeps the
option table handed to ``setup`` and exposes named functions that key
bindings can target.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional

from vim_init.errors import PluginNotLoadedError

CallRecorder = Callable[[str, tuple, dict], object]


def deep_extend(*tables: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge mappings left to right; later values win, nested dicts merge."""

    result: Dict[str, Any] = {}
    for table in tables:
        for key, value in table.items():
            current = result.get(key)
            if isinstance(current, dict) and isinstance(value, Mapping):
                result[key] = deep_extend(current, value)
            elif isinstance(value, Mapping):
                result[key] = deep_extend(value)
            elif isinstance(value, list):
                result[key] = list(value)
            else:
                result[key] = value
    return result


class PluginFunction:
    """Named function exported by a plugin module."""

    __slots__ = ("name", "_recorder")

    def __init__(self, name: str, recorder: Optional[CallRecorder] = None) -> None:
        self.name = name
        self._recorder = recorder

    def __call__(self, *args: object, **kwargs: object) -> object:
        if self._recorder is None:
            return None
        return self._recorder(self.name, args, kwargs)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PluginFunction) and other.name == self.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"PluginFunction({self.name!r})"


class PluginModule:
    """Stand-in for a module a plugin provides (``telescope.builtin``...).

    Unknown public attributes resolve to :class:`PluginFunction` objects;
    assigning an attribute overrides it, as a config would in Lua.
    """

    def __init__(
        self,
        name: str,
        *,
        plugin: str = "",
        recorder: Optional[CallRecorder] = None,
    ) -> None:
        self.name = name
        self.plugin = plugin or name
        self.options: Dict[str, Any] = {}
        self.setup_calls = 0
        self._recorder = recorder

    def setup(self, opts: Optional[Mapping[str, Any]] = None) -> None:
        self.options = deep_extend(self.options, opts or {})
        self.setup_calls += 1

    @property
    def configured(self) -> bool:
        return self.setup_calls > 0

    def __getattr__(self, attr: str) -> PluginFunction:
        if attr.startswith("_"):
            raise AttributeError(attr)
        return PluginFunction(f"{self.name}.{attr}", self._recorder)

    def __repr__(self) -> str:
        return f"PluginModule({self.name!r}, plugin={self.plugin!r})"


class ModuleTable:
    """``require`` lookup for modules registered by loaded plugins."""

    def __init__(self) -> None:
        self._modules: Dict[str, PluginModule] = {}

    def register(self, module: PluginModule) -> PluginModule:
        self._modules.setdefault(module.name, module)
        return self._modules[module.name]

    def require(self, name: str) -> PluginModule:
        try:
            return self._modules[name]
        except KeyError as exc:
            raise PluginNotLoadedError(name) from exc

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    def names(self) -> tuple[str, ...]:
        return tuple(self._modules)


__all__ = ["deep_extend", "ModuleTable", "PluginFunction", "PluginModule"]
