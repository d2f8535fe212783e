"""The package manager: resolves, installs and configures declared plugins."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Iterable,
    Literal,
    Mapping,
    Optional,
    Protocol,
    Union,
)

from vim_init.errors import GitError, PluginSpecError
from vim_init.runtime import telemetry

from .git_ops import CommandRunner, clone
from .modules import PluginModule
from .specs import PluginSpec, coerce_spec, merge_specs

if TYPE_CHECKING:  # pragma: no cover
    from vim_init.host import HostContext

PluginStatus = Literal["loaded", "failed", "disabled"]
PluginPhase = Literal["install", "config", "build", ""]


@dataclass(frozen=True, slots=True)
class InstallResult:
    path: Path
    fresh: bool


class Installer(Protocol):
    def install(self, spec: PluginSpec, root: Path) -> InstallResult: ...


class GitInstaller:
    """Clones missing plugins with git; existing checkouts are left alone."""

    def __init__(self, runner: Optional[CommandRunner] = None) -> None:
        self._runner = runner

    def install(self, spec: PluginSpec, root: Path) -> InstallResult:
        target = root / spec.plugin_name
        if target.exists():
            return InstallResult(target, fresh=False)
        clone(
            spec.url,
            target,
            branch=spec.revision,
            partial=True,
            runner=self._runner,
        )
        return InstallResult(target, fresh=True)


class MemoryInstaller:
    """Pretends every plugin installs; tracks what was asked for."""

    def __init__(self, *, failing: Iterable[str] = ()) -> None:
        self.installed: list[str] = []
        self._failing = set(failing)

    def install(self, spec: PluginSpec, root: Path) -> InstallResult:
        if spec.plugin_name in self._failing:
            raise GitError(f"Failed to clone {spec.url}: simulated failure")
        fresh = spec.plugin_name not in self.installed
        if fresh:
            self.installed.append(spec.plugin_name)
        return InstallResult(root / spec.plugin_name, fresh=fresh)


@dataclass
class PluginContext:
    """Handed to ``config`` callbacks and build steps."""

    host: "HostContext"
    spec: PluginSpec
    path: Path
    opts: Dict[str, Any] = field(default_factory=dict)

    def require(self, name: str) -> PluginModule:
        return self.host.require(name)


@dataclass(slots=True)
class PluginState:
    name: str
    status: PluginStatus
    path: Optional[Path] = None
    phase: PluginPhase = ""
    error: Optional[BaseException] = None


@dataclass
class LoadReport:
    """Per-plugin outcome of :meth:`PluginManager.setup`, in load order."""

    states: Dict[str, PluginState] = field(default_factory=dict)

    @property
    def order(self) -> tuple[str, ...]:
        return tuple(self.states)

    def loaded(self) -> tuple[str, ...]:
        return tuple(n for n, s in self.states.items() if s.status == "loaded")

    def failed(self) -> tuple[str, ...]:
        return tuple(n for n, s in self.states.items() if s.status == "failed")

    def __getitem__(self, name: str) -> PluginState:
        return self.states[name]


class PluginManager:
    """Takes an ordered list of specs and owns everything after submission."""

    def __init__(
        self,
        host: "HostContext",
        *,
        root: Path,
        installer: Optional[Installer] = None,
        unavailable: Optional[BaseException] = None,
        logger_name: str | None = None,
    ) -> None:
        self.host = host
        self.root = root
        self.installer: Installer = installer or GitInstaller()
        # Set when the manager itself is missing: every plugin then fails.
        self.unavailable = unavailable
        self._logger_name = logger_name
        self.specs: Dict[str, PluginSpec] = {}

    def setup(self, declared: Iterable[Union[str, PluginSpec]]) -> LoadReport:
        report = LoadReport()
        with telemetry.span(
            "plugins::setup", logger_name=self._logger_name, component="plugins"
        ) as handle:
            self.specs = self.normalize(declared)
            for name in self.resolve_order(self.specs):
                report.states[name] = self._load(self.specs[name])
            handle.add_metadata("loaded", len(report.loaded()))
            failed = report.failed()
            if failed:
                handle.warn("plugins failed: " + ",".join(failed))
        return report

    def normalize(
        self, declared: Iterable[Union[str, PluginSpec]]
    ) -> Dict[str, PluginSpec]:
        """Flatten dependencies and merge repeated declarations by name."""

        specs: Dict[str, PluginSpec] = {}

        def visit(item: Union[str, PluginSpec], *, explicit: bool) -> str:
            spec = coerce_spec(item)
            name = spec.plugin_name
            current = specs.get(name)
            if current is None:
                specs[name] = spec
            elif explicit or isinstance(item, PluginSpec):
                specs[name] = merge_specs(current, spec)
            for dep in spec.dependencies:
                visit(dep, explicit=False)
            return name

        for item in declared:
            visit(item, explicit=True)
        return specs

    def resolve_order(self, specs: Mapping[str, PluginSpec]) -> list[str]:
        """Dependencies first, otherwise declaration order; cycles are errors."""

        order: list[str] = []
        done: set[str] = set()
        visiting: list[str] = []

        def walk(name: str) -> None:
            if name in done:
                return
            if name in visiting:
                cycle = visiting[visiting.index(name) :] + [name]
                raise PluginSpecError(
                    "dependency cycle: " + " -> ".join(cycle), plugins=cycle
                )
            visiting.append(name)
            for dep in specs[name].dependencies:
                walk(coerce_spec(dep).plugin_name)
            visiting.pop()
            done.add(name)
            order.append(name)

        ranked = sorted(
            enumerate(specs), key=lambda pair: (-specs[pair[1]].priority, pair[0])
        )
        for _, name in ranked:
            walk(name)
        return order

    def _load(self, spec: PluginSpec) -> PluginState:
        name = spec.plugin_name
        if not spec.enabled:
            return PluginState(name, "disabled")

        with telemetry.span(
            "plugins::load",
            logger_name=self._logger_name,
            component="plugins",
            metadata={"plugin": name, "revision": spec.revision or ""},
        ) as handle:
            if self.unavailable is not None:
                handle.warn(f"package manager unavailable: {self.unavailable}")
                return PluginState(
                    name, "failed", phase="install", error=self.unavailable
                )
            try:
                result = self.installer.install(spec, self.root)
            except GitError as exc:
                handle.warn(str(exc))
                return PluginState(name, "failed", phase="install", error=exc)

            self._activate(spec, result.path)
            ctx = PluginContext(
                host=self.host,
                spec=spec,
                path=result.path,
                opts=dict(spec.opts or {}),
            )
            try:
                self._configure(spec, ctx)
            except Exception as exc:
                handle.warn(f"config failed: {exc}")
                return PluginState(
                    name, "failed", path=result.path, phase="config", error=exc
                )

            if result.fresh and spec.build is not None:
                try:
                    self._build(spec, ctx)
                except Exception as exc:
                    handle.warn(f"build failed: {exc}")
                    return PluginState(
                        name, "failed", path=result.path, phase="build", error=exc
                    )
            return PluginState(name, "loaded", path=result.path)

    def _activate(self, spec: PluginSpec, path: Path) -> None:
        entry = str(path)
        if entry not in self.host.runtimepath:
            self.host.runtimepath.append(entry)
        for module in spec.provided_modules:
            self.host.new_module(module, plugin=spec.plugin_name)
        self.host.colorschemes.update(spec.colors)

    def _configure(self, spec: PluginSpec, ctx: PluginContext) -> None:
        if spec.config is not None:
            spec.config(ctx)
        elif spec.opts is not None:
            ctx.require(spec.main_module).setup(ctx.opts)

    def _build(self, spec: PluginSpec, ctx: PluginContext) -> None:
        build = spec.build
        if callable(build):
            build(ctx)
        elif isinstance(build, str):
            self.host.run_command(build[1:])


__all__ = [
    "GitInstaller",
    "InstallResult",
    "Installer",
    "LoadReport",
    "MemoryInstaller",
    "PluginContext",
    "PluginManager",
    "PluginState",
]
