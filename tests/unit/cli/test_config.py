"""Unit tests for the config commands."""

import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from treescrub.cli.main import app

runner = CliRunner()


@pytest.fixture
def settings_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect the default settings path into tmp_path."""
    path = tmp_path / "home" / "config.toml"
    monkeypatch.setattr("treescrub.core.settings.get_settings_path", lambda: path)
    monkeypatch.setattr("treescrub.cli.commands.config.get_settings_path", lambda: path)
    return path


class TestConfigShow:
    """Tests for treescrub config show."""

    def test_show_defaults(self, settings_path: Path) -> None:
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "Using built-in defaults" in result.output
        assert "Run Flags" in result.output
        assert "Deletion Patterns" in result.output
        assert "bin, obj" in result.output

    def test_show_settings_file(self, settings_path: Path) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text('[patterns]\ndirectories = ["out"]\n', encoding="utf-8")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "Settings from" in result.output
        assert "bin, obj" not in result.output

    def test_show_invalid_file(self, settings_path: Path) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("not toml [", encoding="utf-8")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 1
        assert "Failed to load settings" in result.output


class TestConfigInit:
    """Tests for treescrub config init."""

    def test_init_default_path(self, settings_path: Path) -> None:
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert "Settings written to" in result.output
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
        assert data["clean"] == {"recursive": True, "force": True, "strip_project_bindings": False}

    def test_init_explicit_path(self, settings_path: Path, tmp_path: Path) -> None:
        target = tmp_path / "elsewhere" / "treescrub.toml"

        result = runner.invoke(app, ["config", "init", str(target)])

        assert result.exit_code == 0
        assert target.exists()
        assert not settings_path.exists()

    def test_init_refuses_to_overwrite(self, settings_path: Path) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("[clean]\nforce = false\n", encoding="utf-8")

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert settings_path.read_text(encoding="utf-8") == "[clean]\nforce = false\n"

    def test_init_overwrite(self, settings_path: Path) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("[clean]\nforce = false\n", encoding="utf-8")

        result = runner.invoke(app, ["config", "init", "--overwrite"])

        assert result.exit_code == 0
        with open(settings_path, "rb") as f:
            assert tomllib.load(f)["clean"]["force"] is True
