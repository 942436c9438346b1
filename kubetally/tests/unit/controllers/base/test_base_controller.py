"""Tests for base controller module."""

from __future__ import annotations

import pytest

from kubetally.controllers.base.base_controller import BaseController, WorkerResult
from kubetally.controllers.base.errors import (
    AuditError,
    ExtractionError,
    FetchError,
    ParseError,
)


class TestWorkerResult:
    """Tests for WorkerResult dataclass."""

    def test_worker_result_success(self) -> None:
        result = WorkerResult(success=True, data=[1], duration_ms=12.5)
        assert result.success is True
        assert result.data == [1]
        assert result.error is None

    def test_worker_result_defaults(self) -> None:
        result = WorkerResult(success=False)
        assert result.data is None
        assert result.duration_ms == 0.0


class TestBaseController:
    """Tests for BaseController abstract class."""

    def test_base_controller_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            BaseController()  # type: ignore[abstract]


class TestErrors:
    """Tests for the error hierarchy."""

    def test_fetch_error_message(self) -> None:
        error = FetchError("payments", "timed out", "pod")
        assert isinstance(error, AuditError)
        assert str(error) == "Failed to fetch workloads for payments/pod: timed out"

    def test_extraction_error_without_namespace(self) -> None:
        error = ExtractionError("web", None, "no namespace")
        assert str(error) == "<no namespace>/web: no namespace"

    def test_parse_error_keeps_quantity(self) -> None:
        error = ParseError("12x")
        assert error.quantity == "12x"
        assert isinstance(error, ValueError)
