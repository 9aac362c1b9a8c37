"""Tests specific to the SQLite DatabaseStore."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import select
from sqlalchemy.engine import Engine

from blogctl.infrastructure.database import DatabaseStore, documents, init_database
from blogctl.infrastructure.store import StoreError


class TestDatabaseStore:
    def test_body_stored_as_json(self, db_engine: Engine) -> None:
        store = DatabaseStore(db_engine, owns_engine=False)
        store.insert("users", {"id": "a", "roles": ["author"]})
        with db_engine.connect() as conn:
            row = conn.execute(select(documents)).one()
        assert row.category == "users"
        assert row.id == "a"
        assert row.body == {"id": "a", "roles": ["author"]}

    def test_persists_across_engines(self, tmp_path: Path) -> None:
        path = tmp_path / "blog.db"
        first = DatabaseStore(init_database(path))
        first.insert("users", {"id": "a"})
        first.close()

        second = DatabaseStore(init_database(path))
        try:
            assert second.get("users", "a") == {"id": "a"}
        finally:
            second.close()

    def test_engine_errors_become_store_errors(self, db_engine: Engine) -> None:
        store = DatabaseStore(db_engine, owns_engine=False)
        documents.drop(db_engine)
        with pytest.raises(StoreError, match="database read failed"):
            store.get("users", "a")
        with pytest.raises(StoreError, match="database insert failed"):
            store.insert("users", {"id": "a"})

    def test_duplicate_insert_message(self, db_engine: Engine) -> None:
        store = DatabaseStore(db_engine, owns_engine=False)
        store.insert("users", {"id": "a"})
        with pytest.raises(StoreError, match="database insert failed"):
            store.insert("users", {"id": "a"})

    def test_engine_property(self, db_engine: Engine) -> None:
        assert DatabaseStore(db_engine, owns_engine=False).engine is db_engine
