"""Command: create a user, article or comment."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.commands._base import FIELD, BlogCommand, fields_to_dict

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext


@click.command(
    cls=BlogCommand,
    examples="""\
  blogctl create users id=jdoe email=jdoe@example.com firstName=John lastName=Doe roles=author
  blogctl create articles authorId=jdoe title="Hello" content="First post" keywords=intro,misc
  blogctl create comments commenterId=jdoe articleId=42.13579 content="Nice!" """,
)
@click.argument("category")
@click.argument("fields", nargs=-1, type=FIELD)
@click.pass_obj
def create(app: AppContext, category: str, fields: tuple[tuple[str, str], ...]) -> None:
    """Create an object in CATEGORY from KEY=VALUE fields."""
    app.emit(app.service.create(category, fields_to_dict(fields)))
