import pytest

from vim_init.autocmds import (
    BUF_WIN_ENTER,
    BUF_WIN_LEAVE,
    LSP_ATTACH,
    AutocmdDecl,
    AutocmdEvent,
    AutocmdRegistry,
    apply_autocmds,
)
from vim_init.config import AUGROUP, AUTOCMDS
from vim_init.errors import VimInitError
from vim_init.host import HostContext, View, ViewStore


def make_recorder(log: list[str], label: str):
    def callback(event: AutocmdEvent) -> None:
        log.append(f"{label}:{event.event}:{event.match}")

    return callback


def test_handlers_run_in_registration_order() -> None:
    registry = AutocmdRegistry()
    log: list[str] = []
    registry.create_autocmd(BUF_WIN_ENTER, callback=make_recorder(log, "a"))
    registry.create_autocmd(BUF_WIN_ENTER, callback=make_recorder(log, "b"))

    fired = registry.exec_autocmds(BUF_WIN_ENTER, match="main.py")

    assert fired == 2
    assert log == ["a:BufWinEnter:main.py", "b:BufWinEnter:main.py"]


def test_each_occurrence_fires_handler_once() -> None:
    registry = AutocmdRegistry()
    log: list[str] = []
    registry.create_autocmd(BUF_WIN_ENTER, callback=make_recorder(log, "a"))

    registry.exec_autocmds(BUF_WIN_ENTER, match="x.py")
    registry.exec_autocmds(BUF_WIN_ENTER, match="y.py")

    assert log == ["a:BufWinEnter:x.py", "a:BufWinEnter:y.py"]


def test_pattern_filters_matches() -> None:
    registry = AutocmdRegistry()
    log: list[str] = []
    registry.create_autocmd(
        BUF_WIN_ENTER, pattern="*.*", callback=make_recorder(log, "dotted")
    )

    registry.exec_autocmds(BUF_WIN_ENTER, match="Makefile")
    registry.exec_autocmds(BUF_WIN_ENTER, match="setup.py")

    assert log == ["dotted:BufWinEnter:setup.py"]


def test_once_handler_is_removed_after_firing() -> None:
    registry = AutocmdRegistry()
    log: list[str] = []
    registry.create_autocmd(LSP_ATTACH, callback=make_recorder(log, "a"), once=True)

    registry.exec_autocmds(LSP_ATTACH)
    registry.exec_autocmds(LSP_ATTACH)

    assert len(log) == 1
    assert len(registry) == 0


def test_failing_handler_does_not_stop_others() -> None:
    registry = AutocmdRegistry()
    log: list[str] = []

    def broken(event: AutocmdEvent) -> None:
        raise RuntimeError("boom")

    broken_id = registry.create_autocmd(BUF_WIN_LEAVE, callback=broken)
    registry.create_autocmd(BUF_WIN_LEAVE, callback=make_recorder(log, "ok"))

    fired = registry.exec_autocmds(BUF_WIN_LEAVE, match="a.txt")

    assert fired == 2
    assert log == ["ok:BufWinLeave:a.txt"]
    assert [f.autocmd_id for f in registry.failures] == [broken_id]


def test_exactly_one_handler_kind_required() -> None:
    registry = AutocmdRegistry()

    with pytest.raises(ValueError):
        registry.create_autocmd(BUF_WIN_ENTER)
    with pytest.raises(ValueError):
        registry.create_autocmd(
            BUF_WIN_ENTER, callback=lambda event: None, command="mkview"
        )


def test_command_handler_uses_runner() -> None:
    commands: list[str] = []
    registry = AutocmdRegistry(command_runner=commands.append)
    registry.create_autocmd(BUF_WIN_LEAVE, command="mkview")

    registry.exec_autocmds(BUF_WIN_LEAVE, match="a.txt")

    assert commands == ["mkview"]


def test_augroup_clear_replaces_previous_definitions() -> None:
    host = HostContext()
    decls = (AutocmdDecl(BUF_WIN_ENTER, command="echo hi"),)

    apply_autocmds(host, decls, group="grp")
    apply_autocmds(host, decls, group="grp")

    assert len(host.autocmds.get_autocmds(group="grp")) == 1


def test_view_is_saved_on_leave_and_restored_on_enter() -> None:
    host = HostContext()
    apply_autocmds(host, AUTOCMDS, group=AUGROUP)
    first = host.open_buffer("src/main.py")
    first.set_cursor(10, 4)
    first.folds = ((2, 5),)

    second = host.open_buffer("README.md")
    assert "src/main.py" in host.views
    first.set_cursor(0, 0)
    first.folds = ()
    host.switch_buffer(first.id)

    assert host.buffers.current is first
    assert first.cursor == (10, 4)
    assert first.folds == ((2, 5),)
    assert host.views.load("README.md") == View(cursor=(0, 0))
    assert second.id != first.id


def test_missing_view_is_silently_ignored() -> None:
    host = HostContext()
    apply_autocmds(host, AUTOCMDS, group=AUGROUP)

    host.open_buffer("fresh.txt")

    assert host.autocmds.failures == []
    assert host.buffers.current is not None
    assert host.buffers.current.cursor == (0, 0)


def test_views_persist_to_directory(tmp_path) -> None:
    host = HostContext(view_dir=tmp_path)
    apply_autocmds(host, AUTOCMDS, group=AUGROUP)
    first = host.open_buffer("/work/a.py")
    first.set_cursor(3, 1)
    host.open_buffer("/work/b.py")

    reloaded = HostContext(view_dir=tmp_path)

    assert reloaded.views.load("/work/a.py").cursor == (3, 1)
    assert (tmp_path / "=+work=+a.py=").exists()


def test_lsp_attach_installs_buffer_local_keymaps() -> None:
    host = HostContext()
    host.globals["mapleader"] = " "
    apply_autocmds(host, AUTOCMDS, group=AUGROUP)
    info = host.open_buffer("main.lua")

    host.attach_lsp(info.id)

    binding = host.keymaps.get("normal", "<leader>rn", buffer=info.id)
    assert binding is not None
    assert host.keymaps.get("normal", "<leader>rn") is None
    result = host.feed_keys("n", "<leader>rn")
    assert result.status == "match"
    assert host.calls[-1].name == "lsp.buf.rename"
    assert host.calls[-1].kwargs == {"buffer": info.id}


def test_once_handler_with_several_patterns_fires_once() -> None:
    registry = AutocmdRegistry()
    log: list[str] = []
    registry.create_autocmd(
        BUF_WIN_ENTER,
        pattern=("*.py", "*"),
        callback=make_recorder(log, "a"),
        once=True,
    )

    fired = registry.exec_autocmds(BUF_WIN_ENTER, match="a.py")
    registry.exec_autocmds(BUF_WIN_ENTER, match="a.py")

    assert fired == 1
    assert log == ["a:BufWinEnter:a.py"]
    assert len(registry) == 0


def test_handler_with_several_patterns_fires_once_per_occurrence() -> None:
    registry = AutocmdRegistry()
    log: list[str] = []
    registry.create_autocmd(
        BUF_WIN_ENTER, pattern=("*.py", "a.*"), callback=make_recorder(log, "a")
    )

    registry.exec_autocmds(BUF_WIN_ENTER, match="a.py")

    assert log == ["a:BufWinEnter:a.py"]


def test_handler_deleted_by_earlier_handler_does_not_run() -> None:
    registry = AutocmdRegistry()
    log: list[str] = []
    ids: list[int] = []

    def first(event: AutocmdEvent) -> None:
        log.append("first")
        registry.delete_autocmd(ids[0])

    registry.create_autocmd(BUF_WIN_ENTER, callback=first)
    ids.append(
        registry.create_autocmd(
            BUF_WIN_ENTER, callback=lambda event: log.append("second")
        )
    )

    fired = registry.exec_autocmds(BUF_WIN_ENTER)

    assert fired == 1
    assert log == ["first"]


def test_group_cleared_by_earlier_handler_stops_its_members() -> None:
    registry = AutocmdRegistry()
    log: list[str] = []
    registry.create_augroup("grp")

    def reset(event: AutocmdEvent) -> None:
        log.append("reset")
        registry.create_augroup("grp", clear=True)

    registry.create_autocmd(BUF_WIN_ENTER, callback=reset)
    registry.create_autocmd(
        BUF_WIN_ENTER, group="grp", callback=lambda event: log.append("member")
    )

    registry.exec_autocmds(BUF_WIN_ENTER)

    assert log == ["reset"]


def test_corrupt_view_file_is_silently_ignored(tmp_path) -> None:
    (tmp_path / "a.py=").write_text("not json", encoding="utf-8")
    host = HostContext(view_dir=tmp_path)
    apply_autocmds(host, AUTOCMDS, group=AUGROUP)

    info = host.open_buffer("a.py")

    assert info.cursor == (0, 0)
    assert host.autocmds.failures == []


def test_corrupt_view_file_raises_editor_error(tmp_path) -> None:
    (tmp_path / "a.py=").write_text("not json", encoding="utf-8")
    host = HostContext(view_dir=tmp_path)
    host.open_buffer("a.py")

    with pytest.raises(VimInitError, match="Corrupt view file"):
        host.run_command("loadview")


def test_view_file_names_escape_equals(tmp_path) -> None:
    store = ViewStore(tmp_path)

    store.save("a/b", View(cursor=(1, 0)))
    store.save("a=+b", View(cursor=(2, 0)))

    assert (tmp_path / "a=+b=").exists()
    assert (tmp_path / "a==+b=").exists()
    assert ViewStore(tmp_path).load("a/b").cursor == (1, 0)
    assert ViewStore(tmp_path).load("a=+b").cursor == (2, 0)
