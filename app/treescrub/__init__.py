"""treescrub - sanitize software project trees.

Removes build output, IDE scratch files and legacy source-control
bindings from a project tree.
"""

__version__ = "0.1.0"
