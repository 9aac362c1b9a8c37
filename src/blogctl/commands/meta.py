"""Command: show the field rules of every category."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogCommand

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext


@click.command(cls=BlogCommand)
@click.pass_obj
def meta(app: AppContext) -> None:
    """Show fields, labels and per-action rules for each category."""
    app.emit(app.service.describe())
