"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from blogctl.domain.errors import BlogError
from blogctl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="create_users", data={"id": "jdoe"})
        assert result.ok is True
        assert result.op == "create_users"
        assert result.data == {"id": "jdoe"}
        assert result.errors == []
        assert result.error is None
        assert result.meta is None

    def test_failure_keeps_every_error(self) -> None:
        result = ServiceResult.failure(
            "create_users",
            [
                BlogError(code="BAD_FIELD", message="a"),
                BlogError(code="MISSING_FIELD", message="b"),
            ],
        )
        assert result.ok is False
        assert result.codes == ["BAD_FIELD", "MISSING_FIELD"]
        assert result.error == ServiceError(code="BAD_FIELD", message="a")

    def test_failure_extra_fields(self) -> None:
        result = ServiceResult.failure(
            "load_users", [BlogError(code="EXISTS", message="x")], data={"created": []}
        )
        assert result.data == {"created": []}

    def test_json_serialization(self) -> None:
        result = ServiceResult(
            ok=True,
            op="find_users",
            data={"items": []},
            meta={"duration_ms": 42},
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["op"] == "find_users"
        assert parsed["data"]["items"] == []
        assert parsed["meta"]["duration_ms"] == 42

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_fields(self) -> None:
        err = ServiceError(code="DB", message="boom")
        assert err.model_dump() == {"code": "DB", "message": "boom"}
