"""Rich Console factory and theme for blogctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

BLOG_THEME = Theme(
    {
        "blog.ok": "bold green",
        "blog.error": "bold red",
        "blog.code": "red",
        "blog.op": "bold cyan",
        "blog.key": "dim",
        "blog.id": "bold blue",
        "blog.ref": "blue",
        "blog.category.users": "green",
        "blog.category.articles": "magenta",
        "blog.category.comments": "yellow",
    }
)

_CATEGORY_STYLES: dict[str, str] = {
    "users": "blog.category.users",
    "articles": "blog.category.articles",
    "comments": "blog.category.comments",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=BLOG_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_category(category: str) -> str:
    """Return the Rich style name for a blog category."""
    return _CATEGORY_STYLES.get(category, "")
