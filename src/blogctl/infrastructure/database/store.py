"""DatabaseStore: BlogStore backed by the SQLite ``documents`` table.

Each method runs in its own ``engine.begin()`` transaction. Any
``SQLAlchemyError`` is re-raised as :class:`StoreError` so the service
layer sees one failure type regardless of backend.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from blogctl.infrastructure.database.schema import documents
from blogctl.infrastructure.store import BlogStore, StoreError, matches

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.debug("Database %s failed", action, exc_info=True)
        raise StoreError(f"database {action} failed: {exc}") from exc


class DatabaseStore(BlogStore):
    """Persistent backend using SQLAlchemy Core over SQLite."""

    def __init__(self, engine: Engine, *, owns_engine: bool = True) -> None:
        self._engine = engine
        self._owns_engine = owns_engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def get(self, category: str, object_id: str) -> dict[str, Any] | None:
        with _storage_errors("read"), self._engine.connect() as conn:
            row = conn.execute(
                select(documents.c.body).where(
                    documents.c.category == category, documents.c.id == object_id
                )
            ).first()
        return dict(row.body) if row is not None else None

    def insert(self, category: str, obj: Mapping[str, Any]) -> None:
        with _storage_errors("insert"), self._engine.begin() as conn:
            conn.execute(insert(documents).values(category=category, id=obj["id"], body=dict(obj)))

    def replace(self, category: str, obj: Mapping[str, Any]) -> None:
        with _storage_errors("update"), self._engine.begin() as conn:
            result = conn.execute(
                update(documents)
                .where(documents.c.category == category, documents.c.id == obj["id"])
                .values(body=dict(obj))
            )
        if result.rowcount == 0:
            raise StoreError(f"No object with id {obj['id']!r} in {category}")

    def delete(self, category: str, object_id: str) -> None:
        with _storage_errors("delete"), self._engine.begin() as conn:
            conn.execute(
                delete(documents).where(
                    documents.c.category == category, documents.c.id == object_id
                )
            )

    def find(
        self,
        category: str,
        filters: Mapping[str, Any] | None = None,
        *,
        index: int = 0,
        count: int | None = None,
    ) -> list[dict[str, Any]]:
        filters = dict(filters or {})
        stmt = (
            select(documents.c.body)
            .where(documents.c.category == category)
            .order_by(documents.c.id)
        )
        if "id" in filters:
            stmt = stmt.where(documents.c.id == str(filters.pop("id")))

        # Body filters are applied in Python, so paging moves to SQL
        # only when there are none.
        if not filters:
            if index:
                stmt = stmt.offset(index)
            if count is not None:
                stmt = stmt.limit(count)

        with _storage_errors("query"), self._engine.connect() as conn:
            bodies = [dict(row.body) for row in conn.execute(stmt)]

        if not filters:
            return bodies
        hits = [body for body in bodies if matches(body, filters)]
        end = None if count is None else index + count
        return hits[index:end]

    def clear(self) -> None:
        with _storage_errors("clear"), self._engine.begin() as conn:
            conn.execute(delete(documents))

    def close(self) -> None:
        if self._owns_engine:
            self._engine.dispose()
