"""Shared pytest fixtures and test helpers for blogctl tests."""

from __future__ import annotations

import random
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from blogctl.domain.ids import IdRegistry
from blogctl.domain.meta import BLOG_META
from blogctl.infrastructure.database import DatabaseStore, init_database
from blogctl.infrastructure.memory import MemoryStore
from blogctl.infrastructure.store import BlogStore
from blogctl.services.blog import BlogService
from blogctl.services.telemetry import _current_span, disable_telemetry


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Undo --verbose telemetry enabled by CLI invocations."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path / "blog.db")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(params=["memory", "sqlite"])
def store(request: pytest.FixtureRequest, tmp_path: Path) -> Generator[BlogStore]:
    """Every store backend; tests using it run once per backend."""
    if request.param == "memory":
        s: BlogStore = MemoryStore(BLOG_META)
    else:
        s = DatabaseStore(init_database(tmp_path / "blog.db"))
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def service(store: BlogStore) -> BlogService:
    """BlogService over each backend with a seeded, private id registry."""
    return BlogService(store, registry=IdRegistry(random.Random(544)))


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from an empty temp directory so the default SQLite store lands in it.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes so every test gets its own ``.blogctl/blog.db``.
    """
    monkeypatch.delenv("BLOGCTL_CONFIG", raising=False)
    monkeypatch.delenv("BLOGCTL_STORE__BACKEND", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers (used across service test modules)
# ---------------------------------------------------------------------------


def user_fields(user_id: str, **overrides: Any) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "id": user_id,
        "email": f"{user_id}@example.com",
        "firstName": "Test",
        "lastName": "User",
        "roles": ["author", "commenter"],
    }
    fields.update(overrides)
    return fields


def create_user(service: BlogService, user_id: str, **overrides: Any) -> str:
    """Create a user via BlogService, asserting success."""
    result = service.create("users", user_fields(user_id, **overrides))
    assert result.ok, result.errors
    return result.data["id"]


def create_article(service: BlogService, author_id: str, **overrides: Any) -> str:
    """Create an article via BlogService, asserting success."""
    fields: dict[str, Any] = {
        "authorId": author_id,
        "title": "A Title",
        "content": "Some content",
    }
    fields.update(overrides)
    result = service.create("articles", fields)
    assert result.ok, result.errors
    return result.data["id"]


def create_comment(
    service: BlogService, commenter_id: str, article_id: str, **overrides: Any
) -> str:
    """Create a comment via BlogService, asserting success."""
    fields: dict[str, Any] = {
        "commenterId": commenter_id,
        "articleId": article_id,
        "content": "Nice post",
    }
    fields.update(overrides)
    result = service.create("comments", fields)
    assert result.ok, result.errors
    return result.data["id"]
