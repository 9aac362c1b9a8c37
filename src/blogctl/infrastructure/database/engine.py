"""Database engine setup for SQLite with WAL mode.

SQLAlchemy Core (not ORM) is used: the store reads and writes whole JSON
documents, so there is no benefit from session management or identity maps.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from blogctl.infrastructure.database.schema import metadata


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def init_database(db_path: Path) -> Engine:
    """Initialize the blog database at *db_path*.

    Creates the parent directory and all tables from
    :data:`schema.metadata`. Idempotent and safe to call on an existing
    database.

    Returns the engine ready for use.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path)
    metadata.create_all(engine)
    return engine
