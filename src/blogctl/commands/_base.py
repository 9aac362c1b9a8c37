"""Custom Click base classes and parameter types shared by commands.

BlogCommand accepts an ``examples`` parameter; passing ``--examples``
prints them and exits, which keeps ``--help`` concise.
FIELD parses ``KEY=VALUE`` arguments into field assignments.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class BlogCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class FieldAssignment(click.ParamType):
    """``KEY=VALUE`` → ``(key, value)``. The value stays a string."""

    name = "KEY=VALUE"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> tuple[str, str]:
        if isinstance(value, tuple):
            return value
        key, sep, raw = str(value).partition("=")
        if not sep or not key:
            self.fail(f"{value!r} is not of the form KEY=VALUE", param, ctx)
        return key, raw


FIELD = FieldAssignment()


def fields_to_dict(pairs: tuple[tuple[str, str], ...]) -> dict[str, str]:
    """Collect parsed assignments; a repeated key keeps its last value."""
    return dict(pairs)
