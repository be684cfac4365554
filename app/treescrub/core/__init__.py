"""Core support for treescrub: paths, settings and theme."""
