"""Output colors for the treescrub CLI.

The defaults live in :class:`ThemeColors`. A user file at
``~/.config/treescrub/theme.toml`` may override any of them in a
``[colors]`` table; a file that cannot be used is ignored with a warning.
"""

import functools
import logging
import re
import tomllib

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from treescrub.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class ThemeColors(BaseModel):
    """Hex colors for each style the CLI prints with."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    info: str = "#0ec1c8"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"

    deleted: str = "#03b971"
    cleaned: str = "#0e8ac8"
    skipped: str = "#faf870"

    @field_validator("*")
    @classmethod
    def _check_hex(cls, value: str) -> str:
        value = value.strip()
        if _HEX_COLOR.fullmatch(value) is None:
            raise ValueError(f"expected #RGB or #RRGGBB, got {value!r}")
        return value


def load_theme() -> ThemeColors:
    """Return the default colors merged with the user's overrides."""
    path = get_user_theme_path()
    if not path.is_file():
        return ThemeColors()

    try:
        with path.open("rb") as f:
            overrides = tomllib.load(f).get("colors", {})
        colors = ThemeColors.model_validate(overrides)
    except (OSError, tomllib.TOMLDecodeError, ValidationError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return ThemeColors()

    logger.debug("Loaded theme overrides from %s", path)
    return colors


def get_rich_theme(colors: ThemeColors) -> Theme:
    """Build the Rich theme with one style per color plus a few derived ones."""
    styles = colors.model_dump()
    styles["error"] = f"bold {colors.error}"
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    return Theme(styles)


@functools.cache
def get_theme() -> Theme:
    """Rich theme for this process, read from disk on first use."""
    return get_rich_theme(load_theme())
