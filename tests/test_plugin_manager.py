import subprocess
from pathlib import Path

import pytest

from vim_init.errors import GitError, PluginNotLoadedError, PluginSpecError
from vim_init.host import HostContext
from vim_init.plugins import (
    GitInstaller,
    MemoryInstaller,
    PluginContext,
    PluginManager,
    PluginSpec,
    coerce_spec,
    deep_extend,
    merge_specs,
)


def make_manager(
    host: HostContext | None = None,
    *,
    installer: MemoryInstaller | None = None,
    unavailable: BaseException | None = None,
) -> PluginManager:
    return PluginManager(
        host or HostContext(),
        root=Path("/plugins"),
        installer=installer or MemoryInstaller(),
        unavailable=unavailable,
    )


def test_spec_names_and_urls() -> None:
    spec = PluginSpec("nvim-telescope/telescope.nvim", tag="0.1.6")

    assert spec.plugin_name == "telescope.nvim"
    assert spec.url == "https://github.com/nvim-telescope/telescope.nvim.git"
    assert spec.revision == "0.1.6"
    assert spec.main_module == "telescope"


@pytest.mark.parametrize(
    ("source", "module"),
    [
        ("williamboman/mason-lspconfig.nvim", "mason-lspconfig"),
        ("hrsh7th/nvim-cmp", "cmp"),
        ("L3MON4D3/LuaSnip", "luasnip"),
        ("lewis6991/gitsigns.nvim", "gitsigns"),
    ],
)
def test_main_module_guess(source: str, module: str) -> None:
    assert PluginSpec(source).main_module == module


@pytest.mark.parametrize(
    "kwargs",
    [
        {"source": ""},
        {"source": "no-slash"},
        {"source": "a/b", "tag": "v1", "branch": "main"},
        {"source": "a/b", "build": "make"},
    ],
)
def test_invalid_specs_rejected(kwargs: dict) -> None:
    with pytest.raises(PluginSpecError):
        PluginSpec(**kwargs)


def test_merge_specs_prefers_explicit_fields() -> None:
    base = PluginSpec("a/b", dependencies=("c/d",))
    extra = PluginSpec("a/b", tag="v2", dependencies=("e/f",))

    merged = merge_specs(base, extra)

    assert merged.tag == "v2"
    assert merged.dependencies == ("c/d", "e/f")


def test_dependencies_load_first() -> None:
    manager = make_manager()

    report = manager.setup(
        [
            PluginSpec("x/app", dependencies=("x/lib",)),
            "x/lib",
            "x/other",
        ]
    )

    assert report.order == ("lib", "app", "other")
    assert report.loaded() == ("lib", "app", "other")


def test_priority_orders_independent_plugins() -> None:
    manager = make_manager()

    report = manager.setup(["x/first", PluginSpec("x/theme", priority=1000)])

    assert report.order == ("theme", "first")


def test_dependency_cycle_is_an_error() -> None:
    manager = make_manager()

    with pytest.raises(PluginSpecError, match="cycle"):
        manager.setup(
            [
                PluginSpec("x/a", dependencies=("x/b",)),
                PluginSpec("x/b", dependencies=("x/a",)),
            ]
        )


def test_repeated_declarations_merge() -> None:
    manager = make_manager()

    specs = manager.normalize(
        [PluginSpec("x/lib", priority=10), PluginSpec("x/lib", tag="v1")]
    )

    assert list(specs) == ["lib"]
    assert specs["lib"].tag == "v1"
    assert specs["lib"].priority == 10


def test_opts_are_passed_to_main_module_setup() -> None:
    host = HostContext()
    manager = make_manager(host)

    manager.setup([PluginSpec("folke/todo-comments.nvim", opts={"signs": False})])

    module = host.require("todo-comments")
    assert module.configured
    assert module.options == {"signs": False}


def test_config_receives_context_and_runs_after_install() -> None:
    seen: list[PluginContext] = []
    manager = make_manager()

    report = manager.setup([PluginSpec("x/tool", config=seen.append)])

    assert report["tool"].status == "loaded"
    assert seen[0].spec.plugin_name == "tool"
    assert seen[0].path == Path("/plugins/tool")
    assert "/plugins/tool" in seen[0].host.runtimepath


def test_config_failure_is_contained() -> None:
    def broken(ctx: PluginContext) -> None:
        raise RuntimeError("bad config")

    manager = make_manager()

    report = manager.setup([PluginSpec("x/bad", config=broken), "x/good"])

    assert report["bad"].status == "failed"
    assert report["bad"].phase == "config"
    assert report["good"].status == "loaded"


def test_require_of_missing_module_fails_config() -> None:
    def needs_missing(ctx: PluginContext) -> None:
        ctx.require("not.loaded").setup()

    manager = make_manager()

    report = manager.setup([PluginSpec("x/needy", config=needs_missing)])

    assert isinstance(report["needy"].error, PluginNotLoadedError)


def test_install_failure_is_contained() -> None:
    manager = make_manager(installer=MemoryInstaller(failing={"broken"}))

    report = manager.setup(["x/broken", "x/fine"])

    assert report.failed() == ("broken",)
    assert report["broken"].phase == "install"
    assert isinstance(report["broken"].error, GitError)
    assert report.loaded() == ("fine",)


def test_build_runs_only_on_fresh_install() -> None:
    builds: list[str] = []
    installer = MemoryInstaller()
    spec = PluginSpec("x/compiled", build=lambda ctx: builds.append(ctx.spec.source))

    make_manager(installer=installer).setup([spec])
    make_manager(installer=installer).setup([spec])

    assert builds == ["x/compiled"]


def test_build_command_runs_through_host() -> None:
    host = HostContext()
    host.commands.register("Compile", lambda h, args: h.echo("compiled"))
    manager = make_manager(host)

    manager.setup([PluginSpec("x/compiled", build=":Compile")])

    assert host.messages == ["compiled"]


def test_disabled_plugin_is_skipped() -> None:
    installer = MemoryInstaller()
    manager = make_manager(installer=installer)

    report = manager.setup([PluginSpec("x/off", enabled=False)])

    assert report["off"].status == "disabled"
    assert installer.installed == []


def test_unavailable_manager_fails_every_plugin() -> None:
    error = GitError("no manager")
    manager = make_manager(unavailable=error)

    report = manager.setup(["x/a", "x/b"])

    assert report.failed() == ("a", "b")
    assert report["a"].error is error


def test_git_installer_clones_at_revision(tmp_path: Path) -> None:
    calls: list[list[str]] = []

    def runner(cmd):
        calls.append(list(cmd))
        return subprocess.CompletedProcess(list(cmd), 0, "", "")

    installer = GitInstaller(runner)
    (tmp_path / "present").mkdir()

    fresh = installer.install(PluginSpec("x/tool", tag="v1"), tmp_path)
    existing = installer.install(PluginSpec("x/present"), tmp_path)

    assert fresh.fresh and not existing.fresh
    assert calls == [
        [
            "git",
            "clone",
            "--filter=blob:none",
            "--branch=v1",
            "https://github.com/x/tool.git",
            str(tmp_path / "tool"),
        ]
    ]


def test_coerce_spec_rejects_other_types() -> None:
    with pytest.raises(PluginSpecError):
        coerce_spec(42)  # type: ignore[arg-type]


def test_deep_extend_merges_nested_tables() -> None:
    base = {"a": {"b": 1, "c": [1]}, "d": 1}

    merged = deep_extend(base, {"a": {"b": 2}})

    assert merged == {"a": {"b": 2, "c": [1]}, "d": 1}
    assert merged["a"]["c"] is not base["a"]["c"]


def test_declared_colors_become_available() -> None:
    host = HostContext()
    manager = make_manager(host)

    manager.setup([PluginSpec("x/theme", colors=("dusk",)), "x/plain"])

    assert host.colorschemes == {"dusk"}
    host.run_command("colorscheme dusk")
    assert host.colorscheme == "dusk"
