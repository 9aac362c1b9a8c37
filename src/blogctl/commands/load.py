"""Command: bulk-create objects of one category from a JSON file."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogCommand
from blogctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext


def _invalid_file(op: str, message: str) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        errors=[ServiceError(code="INVALID_FILE", message=message)],
    )


@click.command(
    cls=BlogCommand,
    examples="""\
  blogctl load users users.json
  blogctl load articles articles.json --partial
  blogctl --json load comments comments.json""",
)
@click.argument("category")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--partial", is_flag=True, help="Keep going after a failed item.")
@click.pass_obj
def load(app: AppContext, category: str, file: str, partial: bool) -> None:
    """Create every object in FILE (a JSON array) in CATEGORY.

    Without --partial, loading stops at the first item that fails;
    items created before it are kept.
    """
    op = f"load_{category}"
    try:
        with open(file, encoding="utf-8") as f:
            items = json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        app.emit(_invalid_file(op, f"Error reading {file}: {exc}"))
        return

    if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
        app.emit(_invalid_file(op, f"{file} must contain a JSON array of objects"))
        return

    app.emit(app.service.load(category, items, partial=partial))
