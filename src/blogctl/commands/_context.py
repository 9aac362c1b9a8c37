"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy BlogService construction and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from blogctl.config.settings import BlogSettings
    from blogctl.infrastructure.store import BlogStore
    from blogctl.services.blog import BlogService
    from blogctl.services.result import ServiceResult


def open_store(settings: BlogSettings, categories: list[str]) -> BlogStore:
    """Build the store selected by ``[store] backend``."""
    if settings.store.backend == "memory":
        from blogctl.infrastructure.memory import MemoryStore

        return MemoryStore(categories)

    from blogctl.infrastructure.database import DatabaseStore, init_database

    return DatabaseStore(init_database(settings.db_path))


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The service (and with it the database) is created on first use so
    ``--help`` and ``--version`` never touch storage.
    """

    def __init__(self, settings: BlogSettings) -> None:
        self.settings = settings
        self._service: BlogService | None = None

        from blogctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from blogctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def service(self) -> BlogService:
        """The blog service (created lazily on first access)."""
        if self._service is None:
            from blogctl.domain.meta import BLOG_META
            from blogctl.services.blog import BlogService

            store = open_store(self.settings, list(BLOG_META))
            self._service = BlogService(store, default_count=self.settings.find.default_count)
        return self._service

    def close(self) -> None:
        if self._service is not None:
            self._service.close()
            self._service = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
