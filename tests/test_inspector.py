from pathlib import Path

import pytest

from vim_init.adapters.textual import InspectorModel
from vim_init.plugins import MemoryInstaller
from vim_init.startup import run_startup


def make_model(tmp_path: Path, statuses: list[str] | None = None) -> InspectorModel:
    result = run_startup(
        bootstrap=False,
        manager_path=tmp_path / "lazy" / "lazy.nvim",
        installer=MemoryInstaller(failing={"gitsigns.nvim"}),
    )
    sink = statuses if statuses is not None else []
    return InspectorModel(result, on_status=sink.append)


def test_options_section_marks_configured_values(tmp_path: Path) -> None:
    model = make_model(tmp_path)

    tabstop = model.find("options", "tabstop")
    incsearch = model.find("options", "incsearch")

    assert tabstop is not None and tabstop.cells == ("tabstop", "4", "config")
    assert incsearch is not None and incsearch.cells[2] == "default"


def test_keymaps_section_describes_actions(tmp_path: Path) -> None:
    model = make_model(tmp_path)

    tab = model.find("keymaps", "normal:<Tab>:")

    assert tab is not None
    assert tab.cells[2] == ":bnext"
    assert tab.cells[3] == "global"


def test_plugins_section_reports_failures(tmp_path: Path) -> None:
    model = make_model(tmp_path)

    row = model.find("plugins", "gitsigns.nvim")

    assert row is not None
    assert row.cells[1:3] == ("failed", "install")
    assert "13/14 plugins" in model.status_line()


def test_refresh_rebuilds_and_reports_status(tmp_path: Path) -> None:
    statuses: list[str] = []
    model = make_model(tmp_path, statuses)
    before = model.section("keymaps")

    model.result.host.keymaps.set("n", "zz", "<NOP>")
    model.refresh()

    assert model.section("keymaps") is not before
    assert model.find("keymaps", "normal:zz:") is not None
    assert statuses and "keymaps" in statuses[-1]


def test_unknown_section_rejected(tmp_path: Path) -> None:
    model = make_model(tmp_path)

    with pytest.raises(KeyError):
        model.section("registers")
