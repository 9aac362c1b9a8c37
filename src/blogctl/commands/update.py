"""Command: update fields of an existing object."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.commands._base import FIELD, BlogCommand, fields_to_dict

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext


@click.command(
    cls=BlogCommand,
    examples="""\
  blogctl update users jdoe email=john@example.org
  blogctl update articles 42.13579 title="Better title" keywords=intro""",
)
@click.argument("category")
@click.argument("object_id")
@click.argument("fields", nargs=-1, type=FIELD)
@click.pass_obj
def update(
    app: AppContext,
    category: str,
    object_id: str,
    fields: tuple[tuple[str, str], ...],
) -> None:
    """Overwrite KEY=VALUE fields of OBJECT_ID in CATEGORY."""
    changes = fields_to_dict(fields)
    if not changes:
        click.echo("No changes specified. Use --help for options.", err=True)
        raise SystemExit(1)
    app.emit(app.service.update(category, {"id": object_id, **changes}))
