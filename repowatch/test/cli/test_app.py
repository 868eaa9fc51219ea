from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from repowatch import __version__
from repowatch.cli.app import app
from repowatch.core.errors import ErrorCode
from repowatch.platform.paths import CONFIG_ENV_VAR

runner = CliRunner()


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_missing_config_option(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "unused.toml"))
    result = runner.invoke(app, ["--config", str(tmp_path / "missing.toml"), "repos"])
    assert result.exit_code == int(ErrorCode.USER_ERROR)


def test_invalid_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # the --config callback writes os.environ directly; register it for restore
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "unused.toml"))
    config = tmp_path / "config.toml"
    config.write_text("repos = [42]\n", encoding="utf-8")

    result = runner.invoke(app, ["--config", str(config), "repos"])

    assert result.exit_code == int(ErrorCode.ENV_ERROR)


def test_status_with_empty_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # the --config callback writes os.environ directly; register it for restore
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "unused.toml"))
    config = tmp_path / "config.toml"
    config.write_text("repos = []\n", encoding="utf-8")

    result = runner.invoke(app, ["--config", str(config), "status", "--json"])

    assert result.exit_code == 0
    assert result.stdout.strip() == "[]"
