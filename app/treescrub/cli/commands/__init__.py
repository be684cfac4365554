"""CLI commands for treescrub.

This package contains all subcommand implementations.
"""

from treescrub.cli.commands import clean, config

__all__ = ["clean", "config"]
