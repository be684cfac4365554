"""Unit tests for theme loading and Rich theme generation."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.theme import Theme

from treescrub.core.theme import ThemeColors, get_rich_theme, get_theme, load_theme


@pytest.fixture
def user_theme(tmp_path: Path) -> Iterator[Path]:
    """Point the user theme location at a file in tmp_path (not created)."""
    path = tmp_path / "theme.toml"
    with patch("treescrub.core.theme.get_user_theme_path", return_value=path):
        yield path


class TestThemeColors:
    """Tests for the ThemeColors model."""

    def test_defaults(self) -> None:
        colors = ThemeColors()
        assert colors.deleted == "#03b971"
        assert colors.cleaned == "#0e8ac8"
        assert colors.skipped == "#faf870"

    def test_short_and_long_hex_accepted(self) -> None:
        colors = ThemeColors(muted=" #abc ", border="#AABBCC")
        assert colors.muted == "#abc"
        assert colors.border == "#AABBCC"

    @pytest.mark.parametrize("value", ["ffffff", "#ff", "#gggggg", "#abcd", "red"])
    def test_rejects_non_hex(self, value: str) -> None:
        with pytest.raises(ValueError, match="expected #RGB or #RRGGBB"):
            ThemeColors(deleted=value)

    def test_unknown_color_rejected(self) -> None:
        with pytest.raises(ValueError):
            ThemeColors(unknown_field="#ffffff")  # type: ignore[call-arg]


class TestLoadTheme:
    """Tests for load_theme."""

    def test_defaults_without_user_file(self, user_theme: Path) -> None:
        assert load_theme() == ThemeColors()

    def test_user_file_overrides_only_its_colors(self, user_theme: Path) -> None:
        user_theme.write_text('[colors]\nskipped = "#ff0000"\n')

        colors = load_theme()

        assert colors.skipped == "#ff0000"
        assert colors.deleted == ThemeColors().deleted

    def test_file_without_colors_table_gives_defaults(self, user_theme: Path) -> None:
        user_theme.write_text('[other]\nx = 1\n')

        assert load_theme() == ThemeColors()

    @pytest.mark.parametrize(
        "content",
        [
            "not valid [ toml syntax",
            'colors = "red"\n',
            '[colors]\nskipped = "yellow"\n',
            '[colors]\ndeleted = "#000000"\nignored = 3\n',
        ],
        ids=["bad-toml", "colors-not-a-table", "bad-color", "unknown-key"],
    )
    def test_unusable_file_falls_back_with_warning(
        self, user_theme: Path, content: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        user_theme.write_text(content)

        with caplog.at_level("WARNING", logger="treescrub.core.theme"):
            colors = load_theme()

        assert colors == ThemeColors()
        assert "Ignoring theme file" in caplog.text


class TestGetRichTheme:
    """Tests for get_rich_theme."""

    def test_includes_styles_used_by_cli(self) -> None:
        theme = get_rich_theme(ThemeColors())

        for style in ("deleted", "cleaned", "skipped", "info", "warning", "error", "success", "muted"):
            assert style in theme.styles
        for style in ("bold_header", "dim", "border"):
            assert style in theme.styles

    def test_error_and_header_are_bold(self) -> None:
        theme = get_rich_theme(ThemeColors())

        assert theme.styles["error"].bold
        assert theme.styles["bold_header"].bold

    def test_uses_provided_colors(self) -> None:
        theme = get_rich_theme(ThemeColors(cleaned="#123456"))

        assert theme.styles["cleaned"].color is not None
        assert theme.styles["cleaned"].color.name == "#123456"


class TestGetTheme:
    """Tests for the process-wide theme."""

    def test_loaded_once(self, user_theme: Path) -> None:
        get_theme.cache_clear()
        try:
            with patch("treescrub.core.theme.load_theme", wraps=load_theme) as loader:
                first = get_theme()
                second = get_theme()
        finally:
            get_theme.cache_clear()

        assert isinstance(first, Theme)
        assert first is second
        loader.assert_called_once()
