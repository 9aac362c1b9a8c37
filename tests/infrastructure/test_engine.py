"""Tests for database engine setup."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import inspect, text

from blogctl.infrastructure.database import init_database


class TestInitDatabase:
    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / ".blogctl" / "blog.db"
        engine = init_database(path)
        try:
            assert path.parent.is_dir()
            assert "documents" in inspect(engine).get_table_names()
        finally:
            engine.dispose()

    def test_wal_mode(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path / "blog.db")
        try:
            with engine.connect() as conn:
                mode = conn.execute(text("PRAGMA journal_mode")).scalar()
            assert mode == "wal"
        finally:
            engine.dispose()

    def test_idempotent(self, tmp_path: Path) -> None:
        init_database(tmp_path / "blog.db").dispose()
        engine = init_database(tmp_path / "blog.db")
        try:
            assert "documents" in inspect(engine).get_table_names()
        finally:
            engine.dispose()
