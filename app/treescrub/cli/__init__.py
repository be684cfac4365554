"""CLI package for treescrub.

This package contains the Typer application and all subcommands.
"""

from treescrub.cli.main import app

__all__ = ["app"]
