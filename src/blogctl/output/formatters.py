"""Rich/JSON output helpers.

The CLI renders a ServiceResult for humans (Rich tables and colors) or
machines (``--json``). The formatter picks the mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from blogctl.output.renderers import render_result

if TYPE_CHECKING:
    from blogctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output flags taken from the global CLI options."""

    json_output: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON mode dumps the whole result (including ``meta`` when present);
    human mode delegates to the Rich renderers.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2, exclude_none=True)
    return render_result(result, verbose=settings.verbose)
