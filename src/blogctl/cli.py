"""Root CLI group for blogctl with global flags and command registration."""

from __future__ import annotations

import click

from blogctl import __version__
from blogctl.commands import register_commands
from blogctl.commands._context import AppContext
from blogctl.config.settings import BlogSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="blogctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and timing telemetry.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """blogctl: users, articles and comments with referential integrity."""
    settings = BlogSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
