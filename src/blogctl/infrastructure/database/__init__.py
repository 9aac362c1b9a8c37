"""SQLite document storage via SQLAlchemy Core."""

from blogctl.infrastructure.database.engine import create_db_engine, init_database
from blogctl.infrastructure.database.schema import documents, metadata
from blogctl.infrastructure.database.store import DatabaseStore

__all__ = [
    "DatabaseStore",
    "create_db_engine",
    "documents",
    "init_database",
    "metadata",
]
