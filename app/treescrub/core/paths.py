"""User configuration paths for treescrub.

treescrub keeps no state of its own; the only files it reads outside
the tree being cleaned are optional user settings:

- Settings: ~/.config/treescrub/config.toml
- Theme: ~/.config/treescrub/theme.toml
"""

from pathlib import Path

# Application identifier for directory naming
APP_NAME = "treescrub"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/treescrub/.
    """
    return Path.home() / ".config" / APP_NAME


def get_settings_path() -> Path:
    """Get the default settings file path.

    Returns:
        Path to ~/.config/treescrub/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme configuration path.

    Returns:
        Path to ~/.config/treescrub/theme.toml.
    """
    return get_config_dir() / "theme.toml"
