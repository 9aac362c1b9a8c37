"""structlog configuration for blogctl.

Every log line goes to stderr so command output stays pipeable:
human-readable console lines by default, one JSON object per line with
``--log-json``.

BlogService binds ``op`` (``create_users``, ``clear``, ...) for the
duration of each operation. :func:`add_op_fields` splits it into
``action`` and ``category`` so log lines can be filtered per category.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from blogctl.domain.fields import ACTIONS

# Libraries whose DEBUG chatter is never wanted, even with --verbose.
_QUIET_LOGGERS: dict[str, int] = {
    "sqlalchemy": logging.WARNING,
}


def add_op_fields(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Derive ``action`` / ``category`` from a bound ``op`` such as ``find_users``."""
    op = event_dict.get("op")
    if isinstance(op, str):
        action, _, category = op.partition("_")
        if category and action in (*ACTIONS, "load"):
            event_dict.setdefault("action", action)
            event_dict.setdefault("category", category)
    return event_dict


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        add_op_fields,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderers(log_json: bool) -> list[structlog.types.Processor]:
    if log_json:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Args:
        verbose: DEBUG for ``blogctl`` loggers (service operations, store
            setup); WARNING otherwise.
        log_json: JSON lines instead of console lines.
    """
    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderers(log_json),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("blogctl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name, level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
