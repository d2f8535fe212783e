"""Declarative plugin specifications."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Union

from vim_init.errors import PluginSpecError

if TYPE_CHECKING:  # pragma: no cover
    from .manager import PluginContext

ConfigCallback = Callable[["PluginContext"], object]
BuildStep = Union[str, Callable[["PluginContext"], object]]

GITHUB_URL = "https://github.com/{source}.git"


@dataclass(frozen=True, slots=True)
class PluginSpec:
    """What to load: source, version pin, dependencies and setup routine.

    ``source`` is ``owner/repo`` or a full git URL. ``modules`` lists the
    module names the plugin provides to ``require``; when empty the main
    module is assumed to be the only one. ``colors`` names the color
    schemes it ships.
    """

    source: str
    name: Optional[str] = None
    tag: Optional[str] = None
    branch: Optional[str] = None
    dependencies: tuple[Union[str, "PluginSpec"], ...] = ()
    config: Optional[ConfigCallback] = None
    opts: Optional[Mapping[str, Any]] = None
    build: Optional[BuildStep] = None
    main: Optional[str] = None
    modules: tuple[str, ...] = ()
    colors: tuple[str, ...] = ()
    enabled: bool = True
    priority: int = 50
    extras: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.source or not self.source.strip():
            raise PluginSpecError("plugin source cannot be empty")
        if "://" not in self.source and self.source.count("/") != 1:
            raise PluginSpecError(
                f"plugin source '{self.source}' must be 'owner/repo' or a URL",
                plugins=(self.source,),
            )
        if self.tag and self.branch:
            raise PluginSpecError(
                f"plugin '{self.plugin_name}' pins both a tag and a branch",
                plugins=(self.plugin_name,),
            )
        if isinstance(self.build, str) and not self.build.startswith(":"):
            raise PluginSpecError(
                f"plugin '{self.plugin_name}' build must be an ex command (':...')",
                plugins=(self.plugin_name,),
            )
        object.__setattr__(self, "dependencies", tuple(self.dependencies))
        object.__setattr__(self, "modules", tuple(self.modules))
        object.__setattr__(self, "colors", tuple(self.colors))

    @property
    def plugin_name(self) -> str:
        if self.name:
            return self.name
        tail = self.source.rstrip("/").rsplit("/", 1)[-1]
        return tail[:-4] if tail.endswith(".git") else tail

    @property
    def url(self) -> str:
        if "://" in self.source:
            return self.source
        return GITHUB_URL.format(source=self.source)

    @property
    def revision(self) -> Optional[str]:
        return self.tag or self.branch

    @property
    def main_module(self) -> str:
        """Module ``opts`` are handed to: explicit ``main`` or a name guess."""

        if self.main:
            return self.main
        name = self.plugin_name.lower()
        for prefix in ("nvim-", "vim-"):
            if name.startswith(prefix):
                name = name[len(prefix) :]
        for suffix in (".nvim", "-nvim", ".vim", ".lua"):
            if name.endswith(suffix):
                name = name[: -len(suffix)]
        return name

    @property
    def provided_modules(self) -> tuple[str, ...]:
        if self.modules:
            return self.modules
        return (self.main_module,)


def coerce_spec(item: Union[str, PluginSpec]) -> PluginSpec:
    if isinstance(item, PluginSpec):
        return item
    if isinstance(item, str):
        return PluginSpec(source=item)
    raise PluginSpecError(f"Unsupported plugin declaration: {item!r}")


_DEFAULTS = {
    spec_field.name: spec_field.default
    for spec_field in fields(PluginSpec)
    if spec_field.name != "source"
}


def merge_specs(existing: PluginSpec, incoming: PluginSpec) -> PluginSpec:
    """Combine two declarations of one plugin; explicit fields of ``incoming`` win."""

    if existing.source != incoming.source:
        raise PluginSpecError(
            f"plugin '{existing.plugin_name}' declared from two sources",
            plugins=(existing.source, incoming.source),
        )
    changes: dict[str, Any] = {}
    for name, default in _DEFAULTS.items():
        value = getattr(incoming, name)
        if name == "extras":
            if value:
                changes[name] = {**existing.extras, **value}
            continue
        if name == "dependencies":
            if value:
                merged = list(existing.dependencies)
                merged.extend(dep for dep in value if dep not in merged)
                changes[name] = tuple(merged)
            continue
        if value != default:
            changes[name] = value
    return replace(existing, **changes) if changes else existing


__all__ = ["BuildStep", "ConfigCallback", "PluginSpec", "coerce_spec", "merge_specs"]
