"""Rich Console factory and theme for mosaicpods output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PODS_THEME = Theme(
    {
        "pods.ok": "bold green",
        "pods.error": "bold red",
        "pods.warning": "bold yellow",
        "pods.op": "bold cyan",
        "pods.key": "dim",
        "pods.type": "bold blue",
        "pods.path": "dim",
        "pods.name": "bold",
        "pods.field.container": "magenta",
        "pods.field.image": "green",
        "pods.field.leaf": "",
    }
)

_CONTAINER_TYPES = frozenset({"array", "object"})


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=PODS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_field_type(field_type: str) -> str:
    """Return the Rich style name for a pod field type."""
    if field_type in _CONTAINER_TYPES:
        return "pods.field.container"
    if field_type == "image":
        return "pods.field.image"
    return "pods.field.leaf"
