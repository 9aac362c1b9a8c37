"""Command: remove an object that nothing references."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogCommand

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext


@click.command(
    cls=BlogCommand,
    examples="""\
  blogctl remove comments 123.45678
  blogctl remove users jdoe""",
)
@click.argument("category")
@click.argument("object_id")
@click.pass_obj
def remove(app: AppContext, category: str, object_id: str) -> None:
    """Remove OBJECT_ID from CATEGORY."""
    app.emit(app.service.remove(category, {"id": object_id}))
