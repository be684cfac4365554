"""Shared Rich consoles and one-line message helpers."""

import sys

from rich.console import Console

from treescrub.core.theme import get_theme


def _make_console(*, stderr: bool = False) -> Console:
    stream = sys.stderr if stderr else sys.stdout
    # Hex colors need truecolor; otherwise let Rich decide (e.g. no color when piped).
    color_system = "truecolor" if stream.isatty() else "auto"
    return Console(theme=get_theme(), stderr=stderr, color_system=color_system)


console = _make_console()
err_console = _make_console(stderr=True)


def _labelled(style: str, label: str, message: str) -> str:
    return f"[{style}]{label}:[/] {message}"


def print_info(message: str) -> None:
    console.print(message, style="info")


def print_success(message: str) -> None:
    console.print(message, style="success")


def print_warning(message: str) -> None:
    """Print a warning to stderr."""
    err_console.print(_labelled("warning", "Warning", message))


def print_error(message: str) -> None:
    """Print an error to stderr."""
    err_console.print(_labelled("error", "Error", message))
