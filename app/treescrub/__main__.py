"""Allow ``python -m treescrub``."""

from treescrub.cli.main import app

app()
