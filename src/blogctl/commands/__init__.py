"""Subcommand modules for blogctl.

Provides register_commands() which uses deferred imports to keep
``blogctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every command on the root CLI group."""
    from blogctl.commands.clear import clear
    from blogctl.commands.create import create
    from blogctl.commands.find import find
    from blogctl.commands.load import load
    from blogctl.commands.meta import meta
    from blogctl.commands.remove import remove
    from blogctl.commands.update import update

    cli.add_command(create)
    cli.add_command(find)
    cli.add_command(update)
    cli.add_command(remove)
    cli.add_command(load)
    cli.add_command(clear)
    cli.add_command(meta)
