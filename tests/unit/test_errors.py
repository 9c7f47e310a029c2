"""Unit tests for error classification."""

import logging

import pytest

from faim_api.config import settings
from faim_api.engine.errors import (
    AUTH_ERROR_CODES,
    RETRYABLE_ERROR_CODES,
    classify_error,
    is_auth_error,
    is_retryable_error,
)
from faim_api.models.upstream import UpstreamError


class TestUpstreamErrors:
    """Structured failures reported by the FAIM API."""

    def test_validation_error_gets_friendly_message(self) -> None:
        error = {
            "error_code": "VALIDATION_ERROR",
            "message": "x must be 3-dimensional",
            "detail": "Got shape [5]",
        }
        result = classify_error(error)

        assert result.error_code == "VALIDATION_ERROR"
        assert result.message == "Input validation failed"
        assert "Details: Got shape [5]" in result.details

    def test_authentication_error_suggests_fix(self) -> None:
        result = classify_error({"error_code": "AUTHENTICATION_FAILED", "message": "Bad key"})

        assert result.error_code == "AUTHENTICATION_FAILED"
        assert result.message == "Bad key"
        assert "Suggestion: Your API key is invalid" in result.details

    def test_rate_limit_suggestion(self) -> None:
        result = classify_error({"error_code": "RATE_LIMIT_EXCEEDED", "message": "Slow down"})
        assert "wait before trying again" in result.details

    def test_unknown_code_passes_through(self) -> None:
        result = classify_error({"error_code": "SOMETHING_NEW", "message": "New failure"})

        assert result.error_code == "SOMETHING_NEW"
        assert result.message == "New failure"
        assert result.details is None

    def test_only_error_code(self) -> None:
        result = classify_error({"error_code": "OUT_OF_MEMORY"})

        assert result.error_code == "OUT_OF_MEMORY"
        assert result.message == "An error occurred in the FAIM API"
        assert "Suggestion:" in result.details

    def test_context_is_attached(self) -> None:
        result = classify_error(
            {"error_code": "INVALID_SHAPE", "message": "Bad shape"},
            operation="chronos2 forecast",
            field="x",
        )

        assert result.field == "x"
        assert "Operation: chronos2 forecast" in result.details
        assert "Field: x" in result.details

    def test_upstream_error_model(self) -> None:
        error = UpstreamError(error_code="INVALID_API_KEY", message="nope", status=401)
        result = classify_error(error)

        assert result.error_code == "INVALID_API_KEY"
        assert result.message == "Invalid API key provided"

    def test_exception_with_error_code_is_not_upstream(self) -> None:
        class SDKException(Exception):
            error_code = "INVALID_API_KEY"

        result = classify_error(SDKException("boom"))
        assert result.error_code == "INTERNAL_ERROR"


class TestExceptions:
    """Generic runtime faults."""

    @pytest.mark.parametrize("message", [
        "ECONNREFUSED",
        "connect ECONNREFUSED 127.0.0.1:443",
        "getaddrinfo ENOTFOUND api.faim.it.com",
        "[Errno 111] Connection refused",
    ])
    def test_network_errors(self, message) -> None:
        result = classify_error(RuntimeError(message))

        assert result.error_code == "NETWORK_ERROR"
        assert message in result.details

    def test_connection_error_type(self) -> None:
        assert classify_error(ConnectionResetError("peer reset")).error_code == "NETWORK_ERROR"

    @pytest.mark.parametrize("message", ["Request timeout", "The read operation timed out",
                                         "Deadline exceeded"])
    def test_timeout_errors(self, message) -> None:
        assert classify_error(RuntimeError(message)).error_code == "TIMEOUT_ERROR"

    def test_timeout_error_type(self) -> None:
        assert classify_error(TimeoutError()).error_code == "TIMEOUT_ERROR"

    def test_type_error(self) -> None:
        result = classify_error(TypeError("'NoneType' object is not subscriptable"))

        assert result.error_code == "INTERNAL_SERVER_ERROR"
        assert "type error" in result.message

    def test_generic_exception(self) -> None:
        result = classify_error(ValueError("Something broke"), operation="forecast")

        assert result.error_code == "INTERNAL_ERROR"
        assert result.message == "An unexpected error occurred"
        assert result.details == "ValueError: Something broke | Operation: forecast"

    def test_exception_without_message(self) -> None:
        result = classify_error(ValueError())

        assert result.error_code == "INTERNAL_ERROR"
        assert "Unknown error" in result.details


class TestOtherValues:
    def test_string(self) -> None:
        result = classify_error("plain string")

        assert result.error_code == "UNKNOWN_ERROR"
        assert result.message == "plain string"
        assert result.details is None

    def test_string_with_context(self) -> None:
        result = classify_error("plain string", operation="forecast")
        assert result.details == 'Context: {"operation": "forecast"}'

    @pytest.mark.parametrize("value", [None, 42, 3.5, ["a"], object()])
    def test_unknown_values(self, value) -> None:
        result = classify_error(value)

        assert result.error_code == "UNKNOWN_ERROR"
        assert result.message == "An unexpected error occurred"
        assert type(value).__name__ in result.details

    def test_mapping_without_error_code(self) -> None:
        assert classify_error({"message": "no code"}).error_code == "UNKNOWN_ERROR"

    def test_unprintable_value(self) -> None:
        class Unprintable:
            def __str__(self):
                raise RuntimeError("cannot print")

            def __repr__(self):
                raise RuntimeError("cannot repr")

        result = classify_error(Unprintable())

        assert result.error_code == "UNKNOWN_ERROR"
        assert "<unprintable Unprintable>" in result.details


class TestRetryableAndAuth:
    @pytest.mark.parametrize("code", sorted(RETRYABLE_ERROR_CODES))
    def test_retryable_codes(self, code) -> None:
        assert is_retryable_error({"error_code": code})
        assert not is_auth_error({"error_code": code})

    @pytest.mark.parametrize("code", sorted(AUTH_ERROR_CODES))
    def test_auth_codes(self, code) -> None:
        assert is_auth_error({"error_code": code})
        assert not is_retryable_error({"error_code": code})

    def test_code_sets_are_disjoint(self) -> None:
        assert RETRYABLE_ERROR_CODES.isdisjoint(AUTH_ERROR_CODES)

    def test_validation_error_is_neither(self) -> None:
        error = {"error_code": "VALIDATION_ERROR"}
        assert not is_retryable_error(error)
        assert not is_auth_error(error)

    def test_upstream_error_model(self) -> None:
        assert is_retryable_error(UpstreamError(error_code="RESOURCE_EXHAUSTED"))
        assert is_auth_error(UpstreamError(error_code="AUTHORIZATION_FAILED"))

    @pytest.mark.parametrize("value", [
        TimeoutError("timeout"),
        RuntimeError("TIMEOUT_ERROR"),
        "TIMEOUT_ERROR",
        None,
        42,
    ])
    def test_non_upstream_values(self, value) -> None:
        assert not is_retryable_error(value)
        assert not is_auth_error(value)


class TestLogging:
    def test_logs_resolved_code(self, caplog) -> None:
        with caplog.at_level(logging.ERROR, logger="faim_api.engine.errors"):
            classify_error(RuntimeError("ECONNREFUSED"))

        assert "[NETWORK_ERROR]" in caplog.text

    def test_production_logs_only_important_codes(self, caplog, monkeypatch) -> None:
        monkeypatch.setattr(settings, "ENVIRONMENT", "production")

        with caplog.at_level(logging.ERROR, logger="faim_api.engine.errors"):
            classify_error({"error_code": "RATE_LIMIT_EXCEEDED", "message": "slow"})
            classify_error({"error_code": "AUTHENTICATION_FAILED", "message": "bad key"})

        assert "RATE_LIMIT_EXCEEDED" not in caplog.text
        assert "[AUTHENTICATION_FAILED] bad key" in caplog.text
