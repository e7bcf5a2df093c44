"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from ograph.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="save_all", data={"count": 2})
        assert result.ok is True
        assert result.op == "save_all"
        assert result.data == {"count": 2}
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="NOT_FOUND", message="no rows in result set")
        result = ServiceResult(ok=False, op="node", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_json_serialization(self) -> None:
        result = ServiceResult(
            ok=True, op="walk", data={"count": 1}, meta={"walked": 2, "filtered": 1}
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["count"] == 1
        assert parsed["meta"] == {"walked": 2, "filtered": 1}

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_detail_defaults_empty(self) -> None:
        assert ServiceError(code="X", message="y").detail == {}
