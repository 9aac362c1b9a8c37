"""Operation-specific Rich renderers for ServiceResult.

Renderers are chosen by the op prefix (``create_users`` → ``create``).
Each writes to a StringIO-backed Console; :func:`render_result` returns
the captured text.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from blogctl.output.console import create_console, get_output, style_for_category

if TYPE_CHECKING:
    from rich.console import Console

    from blogctl.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        verb = result.op.split("_", 1)[0]
        renderer = _OP_RENDERERS.get(verb, _render_generic)
        renderer(result, console)
    else:
        _render_errors(result, console)

    if verbose:
        _render_meta(console, result)
    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _category(op: str) -> str:
    return op.split("_", 1)[1] if "_" in op else ""


def _cell(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="blog.ok"), Text(f"  {result.op}", style="blog.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="blog.key")
    style = "blog.id" if key == "id" else ("blog.ref" if key.endswith("Id") else "")
    console.print(k, Text(_cell(value), style=style), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    telemetry = result.meta.get("telemetry")
    if telemetry:
        console.print(Text("  telemetry:", style="dim"))
        _render_span(console, telemetry, indent=4)


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    console.print(f"{' ' * indent}[{style}]{duration:>8.2f}ms[/{style}]  {span.get('name', '?')}")
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_errors(result: ServiceResult, console: Console) -> None:
    console.print(Text("ERROR", style="blog.error"), Text(f"  {result.op}", style="blog.op"))
    for err in result.errors:
        console.print(Text(f"  {err.code}", style="blog.code"), Text(f"  {err.message}"))


def _render_items(result: ServiceResult, console: Console) -> None:
    items: list[dict[str, Any]] = result.data.get("items", [])
    if not items:
        console.print(Text("No matching objects", style="dim"))
        return

    columns: list[str] = []
    for item in items:
        columns.extend(k for k in item if k not in columns)

    category = _category(result.op)
    table = Table(
        title=category or None,
        title_style=style_for_category(category),
        show_header=True,
        pad_edge=False,
    )
    for col in columns:
        table.add_column(col, style="blog.id" if col == "id" else None, no_wrap=col == "id")
    for item in items:
        table.add_row(*(Text(_cell(item.get(col, ""))) for col in columns))
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} items")


def _render_load(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "created", len(result.data.get("created", [])))
    for object_id in result.data.get("created", []):
        console.print(Text(f"    {object_id}", style="blog.id"))


def _render_meta_table(result: ServiceResult, console: Console) -> None:
    for category, fields in result.data.get("categories", {}).items():
        table = Table(title=category, title_style=style_for_category(category), pad_edge=False)
        table.add_column("field", style="blog.id", no_wrap=True)
        table.add_column("label")
        table.add_column("required")
        table.add_column("forbidden")
        table.add_column("default")
        table.add_column("immutable")
        for spec in fields:
            table.add_row(
                spec["name"],
                spec["label"],
                ", ".join(spec["required"]),
                ", ".join(spec["forbidden"]),
                "yes" if spec["default"] else "",
                "yes" if spec.get("immutable") else "",
            )
        console.print(table)


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "find": _render_items,
    "load": _render_load,
    "meta": _render_meta_table,
}
