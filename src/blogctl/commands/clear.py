"""Command: delete all blog data."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogCommand

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext


@click.command(cls=BlogCommand)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
def clear(app: AppContext, yes: bool) -> None:
    """Delete every user, article and comment."""
    if not yes:
        click.confirm("Delete all blog data?", abort=True)
    app.emit(app.service.clear())
