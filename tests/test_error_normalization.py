"""Tests for the error model and fault normalization."""

import logging

import pytest
from backend.app.core.errors import (
    ErrorClassification,
    OperationError,
    bad_request,
    normalize_store_error,
    normalize_unknown_error,
    server_error,
)


class TestClassification:
    def test_bad_request_maps_to_400(self) -> None:
        assert ErrorClassification.bad_request.http_status == 400

    def test_server_error_maps_to_500(self) -> None:
        assert ErrorClassification.server_error.http_status == 500


class TestConstructors:
    def test_bad_request_keeps_detail_order(self) -> None:
        error = bad_request("msg", "first", "second")
        assert error.details == ("first", "second")
        assert error.http_status == 400

    def test_server_error(self) -> None:
        error = server_error("msg")
        assert error.classification is ErrorClassification.server_error
        assert error.details == ()

    def test_is_frozen(self) -> None:
        error = bad_request("msg")
        with pytest.raises(AttributeError):
            error.message = "changed"  # type: ignore[misc]

    def test_default_classification_is_server_error(self) -> None:
        assert OperationError(message="x").http_status == 500


class TestStoreErrorNormalization:
    def test_stringified_cause_is_detail(self) -> None:
        error = normalize_store_error(
            RuntimeError("disk full"),
            message="Error storing item",
            operation="create_post",
            event_name="store_write_failed",
        )
        assert error == server_error("Error storing item", "disk full")

    def test_logs_category_and_correlation(
        self, caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.ERROR):
            normalize_store_error(
                RuntimeError("locked"),
                message="Error storing item",
                operation="create_post",
                event_name="store_write_failed",
                correlation_id="corr-123",
            )
        assert "store_write_failed" in caplog.text
        assert "error_category=server_error" in caplog.text
        assert "correlation_id=corr-123" in caplog.text

    def test_default_correlation(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR):
            normalize_store_error(
                RuntimeError("x"),
                message="m",
                operation="list_posts",
                event_name="store_read_failed",
            )
        assert "correlation_id=N/A" in caplog.text


class TestUnknownErrorNormalization:
    def test_generic_safe_message(self) -> None:
        error = normalize_unknown_error(RuntimeError("something broke"), operation="test")
        assert "unexpected" in error.message.lower()
        assert "something broke" not in error.message
        assert error.details == ()
        assert error.http_status == 500

    def test_details_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR):
            normalize_unknown_error(RuntimeError("internal detail"), operation="test_op")
        assert "unknown_error" in caplog.text
        assert "internal detail" in caplog.text
