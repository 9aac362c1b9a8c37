"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import time

from blogctl.domain.meta import BLOG_META
from blogctl.infrastructure.memory import MemoryStore
from blogctl.services.blog import BlogService
from blogctl.services.result import ServiceResult
from blogctl.services.telemetry import (
    Span,
    disable_telemetry,
    enable_telemetry,
    get_current_span,
    trace_span,
    traced,
)
from tests.conftest import user_fields

# ── Span unit tests ──────────────────────────────────────────────────


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="x").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="x")
        time.sleep(0.001)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict(self) -> None:
        parent = Span(name="parent")
        child = Span(name="child", parent=parent)
        parent.children.append(child)
        child.annotate("rows", 3)
        child.end()
        parent.end()
        d = parent.to_dict()
        assert d["name"] == "parent"
        assert d["children"][0]["name"] == "child"
        assert d["children"][0]["annotations"] == {"rows": 3}
        assert "annotations" not in d


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("x") as span:
            assert span is None

    def test_enabled_without_parent_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("x") as span:
            assert span is None

    def test_get_current_span_disabled(self) -> None:
        assert get_current_span() is None


class TestTraced:
    def test_disabled_returns_result_unchanged(self) -> None:
        @traced
        def op() -> ServiceResult:
            return ServiceResult(ok=True, op="op")

        assert op().meta is None

    def test_enabled_injects_span_tree(self) -> None:
        @traced
        def op() -> ServiceResult:
            with trace_span("inner") as span:
                assert span is not None
                assert get_current_span() is span
            return ServiceResult(ok=True, op="op", meta={"keep": 1})

        enable_telemetry()
        result = op()
        assert result.meta["keep"] == 1
        tree = result.meta["telemetry"]
        assert tree["name"].endswith("op")
        assert [c["name"] for c in tree["children"]] == ["inner"]

    def test_non_result_passthrough(self) -> None:
        @traced
        def op() -> int:
            return 7

        enable_telemetry()
        assert op() == 7

    def test_disable(self) -> None:
        enable_telemetry()
        disable_telemetry()

        @traced
        def op() -> ServiceResult:
            return ServiceResult(ok=True, op="op")

        assert op().meta is None


class TestServiceTelemetry:
    def test_create_phases(self) -> None:
        enable_telemetry()
        service = BlogService(MemoryStore(BLOG_META))
        result = service.create("users", user_fields("jdoe"))
        tree = result.meta["telemetry"]
        assert tree["name"] == "BlogService.create"
        assert [c["name"] for c in tree["children"]] == ["validate", "integrity", "persist"]

    def test_find_phases(self) -> None:
        enable_telemetry()
        service = BlogService(MemoryStore(BLOG_META))
        result = service.find("users")
        assert [c["name"] for c in result.meta["telemetry"]["children"]] == ["validate", "query"]

    def test_failed_result_still_traced(self) -> None:
        enable_telemetry()
        service = BlogService(MemoryStore(BLOG_META))
        result = service.create("users", {})
        assert not result.ok
        assert result.meta["telemetry"]["children"][0]["name"] == "validate"
