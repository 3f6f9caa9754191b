from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from crafty import __version__
from crafty.cli.app import app
from crafty.core.errors import ErrorCode

runner = CliRunner()


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.stdout.strip() == __version__


def test_commands_registered() -> None:
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    for name in ("install", "upgrade", "search", "remove", "list", "ci"):
        assert name in result.stdout


def test_missing_config_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["--config", str(tmp_path / "nope.toml"), "list"])

    assert result.exit_code == int(ErrorCode.USER_ERROR)


def test_broken_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "config.toml"
    # the --config callback exports CRAFTY_CONFIG; restore it afterwards
    monkeypatch.setenv("CRAFTY_CONFIG", str(path))
    path.write_text("[network\n", encoding="utf-8")

    result = runner.invoke(app, ["--config", str(path), "list"])

    assert result.exit_code == int(ErrorCode.ENV_ERROR)


def test_importing_main_module_does_not_run_cli(monkeypatch: pytest.MonkeyPatch) -> None:
    import importlib
    import sys

    import crafty.cli.app as app_mod

    calls: list[str] = []
    monkeypatch.setattr(app_mod, "main", lambda: calls.append("main"))
    monkeypatch.delitem(sys.modules, "crafty.__main__", raising=False)

    importlib.import_module("crafty.__main__")

    assert calls == []
