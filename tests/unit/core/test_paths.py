"""Unit tests for user configuration paths."""

from pathlib import Path
from unittest.mock import patch

from treescrub.core.paths import (
    APP_NAME,
    get_config_dir,
    get_settings_path,
    get_user_theme_path,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir lives under ~/.config."""
        assert get_config_dir() == Path.home() / ".config" / APP_NAME

    def test_follows_home_directory(self, tmp_path: Path) -> None:
        """get_config_dir is derived from the current home directory."""
        with patch("treescrub.core.paths.Path.home", return_value=tmp_path):
            result = get_config_dir()

        assert result == tmp_path / ".config" / "treescrub"


class TestFilePaths:
    """Tests for the file path helpers."""

    def test_settings_path(self) -> None:
        path = get_settings_path()

        assert path.name == "config.toml"
        assert path.parent == get_config_dir()

    def test_user_theme_path(self) -> None:
        path = get_user_theme_path()

        assert path.name == "theme.toml"
        assert path.parent == get_config_dir()
