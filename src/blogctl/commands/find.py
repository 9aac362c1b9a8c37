"""Command: find objects by id or field values."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.commands._base import FIELD, BlogCommand, fields_to_dict

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext


@click.command(
    cls=BlogCommand,
    examples="""\
  blogctl find users
  blogctl find users id=jdoe
  blogctl find articles authorId=jdoe --count 10 --index 10
  blogctl --json find comments articleId=42.13579""",
)
@click.argument("category")
@click.argument("filters", nargs=-1, type=FIELD)
@click.option("--count", "count", type=int, default=None, help="Maximum results to return.")
@click.option("--index", "index", type=int, default=None, help="Matching results to skip.")
@click.pass_obj
def find(
    app: AppContext,
    category: str,
    filters: tuple[tuple[str, str], ...],
    count: int | None,
    index: int | None,
) -> None:
    """List objects in CATEGORY matching KEY=VALUE filters (ascending id)."""
    spec: dict[str, object] = dict(fields_to_dict(filters))
    if count is not None:
        spec["_count"] = count
    if index is not None:
        spec["_index"] = index
    app.emit(app.service.find(category, spec))
