from pathlib import Path

import pytest

from vim_init.cli import main


def test_dry_run_prints_summary(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(["--dry-run", "--data-dir", str(tmp_path)])

    out = capsys.readouterr().out
    assert code == 0
    assert "colorscheme: rose-pine" in out
    assert "plugin telescope.nvim: loaded" in out
    assert "bootstrap" not in out


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(SystemExit):
        main(["--log-preset", "loud"])


def test_invalid_preset_from_environment_is_rejected(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("VIM_INIT_LOG_PRESET", "loud")

    with pytest.raises(SystemExit) as excinfo:
        main(["--dry-run"])

    assert excinfo.value.code == 2
    assert "VIM_INIT_LOG_PRESET" in capsys.readouterr().err
