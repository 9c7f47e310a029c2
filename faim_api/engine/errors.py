"""
Error classification.

Turns anything that can go wrong on the forecast path (a structured failure
from the FAIM API, a Python exception, a bare string, or some unexpected
value) into a uniform ``ErrorResponse`` with a friendly message and, where
one exists, a recovery suggestion. Also answers whether a failure is
retryable or an authentication problem. Retries themselves are left to the
caller.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional

from faim_api.config import settings
from faim_api.models.response import ErrorResponse

logger = logging.getLogger(__name__)

# Produced by request validation
INVALID_REQUEST = "INVALID_REQUEST"
MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
INVALID_PARAMETER = "INVALID_PARAMETER"
INVALID_VALUE_RANGE = "INVALID_VALUE_RANGE"

# Produced by classification of non-upstream failures
NETWORK_ERROR = "NETWORK_ERROR"
TIMEOUT_ERROR = "TIMEOUT_ERROR"
INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
INTERNAL_ERROR = "INTERNAL_ERROR"
UNKNOWN_ERROR = "UNKNOWN_ERROR"

VALIDATION_ERROR_CODES = frozenset({
    INVALID_REQUEST,
    MISSING_REQUIRED_FIELD,
    INVALID_PARAMETER,
    INVALID_VALUE_RANGE,
})

RETRYABLE_ERROR_CODES = frozenset({
    "TIMEOUT_ERROR",
    "OUT_OF_MEMORY",
    "RESOURCE_EXHAUSTED",
    "TRITON_CONNECTION_ERROR",
    "BILLING_TRANSACTION_FAILED",
    "DATABASE_ERROR",
})

AUTH_ERROR_CODES = frozenset({
    "AUTHENTICATION_REQUIRED",
    "AUTHENTICATION_FAILED",
    "INVALID_API_KEY",
    "AUTHORIZATION_FAILED",
})

SUGGESTIONS = {
    "INVALID_API_KEY": "Make sure your FAIM_API_KEY environment variable is set correctly.",
    "AUTHENTICATION_FAILED": "Your API key is invalid or has expired. Please update it.",
    "INSUFFICIENT_FUNDS": "Your account has insufficient funds. Please add credits.",
    "RATE_LIMIT_EXCEEDED": "Too many requests. Please wait before trying again.",
    "INVALID_SHAPE": "The time series data has incorrect dimensions. Check the array structure.",
    "INVALID_PARAMETER": "One or more parameters is invalid. Check the error details.",
    "TIMEOUT_ERROR": "The request took too long. Try with less data or a shorter horizon.",
    "OUT_OF_MEMORY": "The request is too large for the model. Try smaller batches.",
    "MODEL_NOT_FOUND": "The specified model is not available. Check the model name.",
    "RESOURCE_EXHAUSTED": "The service is temporarily unavailable. Please try again later.",
}

FRIENDLY_MESSAGES = {
    "INVALID_API_KEY": "Invalid API key provided",
    "AUTHENTICATION_REQUIRED": "Authentication required",
    "VALIDATION_ERROR": "Input validation failed",
    "TIMEOUT_ERROR": "Request timeout",
}

NETWORK_PATTERNS = (
    "econnrefused",
    "econnreset",
    "ehostunreach",
    "enetunreach",
    "getaddrinfo",
    "connect",
)

TIMEOUT_PATTERNS = (
    "timeout",
    "timed out",
    "deadline exceeded",
)

# Logged even in production
IMPORTANT_CODES = frozenset({
    "AUTHENTICATION_FAILED",
    "INTERNAL_SERVER_ERROR",
    "RESOURCE_EXHAUSTED",
})


def classify_error(
    error: Any,
    operation: Optional[str] = None,
    field: Optional[str] = None,
) -> ErrorResponse:
    """
    Transform any error into an ErrorResponse. Never raises.

    Args:
        error: Upstream failure, exception, string or any other value
        operation: What was being attempted, e.g. "chronos2 forecast"
        field: Request field the failure relates to, if any

    Returns:
        Normalized error response
    """
    upstream = _upstream_fields(error)
    if upstream is not None:
        return _classify_upstream(upstream, error, operation, field)

    if isinstance(error, Exception):
        return _classify_exception(error, operation, field)

    if isinstance(error, str):
        context = {k: v for k, v in (("operation", operation), ("field", field)) if v}
        return ErrorResponse(
            error_code=UNKNOWN_ERROR,
            message=error,
            field=field,
            details=f"Context: {json.dumps(context)}" if context else None,
        )

    _log_error(UNKNOWN_ERROR, "Unexpected error value", error)
    return ErrorResponse(
        error_code=UNKNOWN_ERROR,
        message="An unexpected error occurred",
        field=field,
        details=f"Error type: {type(error).__name__}, {_safe_str(error)}",
    )


def is_retryable_error(error: Any) -> bool:
    """True only for upstream failures whose code marks a transient problem."""
    upstream = _upstream_fields(error)
    return upstream is not None and upstream["error_code"] in RETRYABLE_ERROR_CODES


def is_auth_error(error: Any) -> bool:
    """True only for upstream authentication/authorization failures."""
    upstream = _upstream_fields(error)
    return upstream is not None and upstream["error_code"] in AUTH_ERROR_CODES


def _upstream_fields(error: Any) -> Optional[Dict[str, Any]]:
    """
    Return the fields of a structured upstream failure, or None.

    A mapping or plain object with a string ``error_code`` qualifies;
    exceptions never do, even if they carry an ``error_code`` attribute.
    """
    if error is None or isinstance(error, (BaseException, str)):
        return None

    if isinstance(error, Mapping):
        fields = dict(error)
    else:
        try:
            fields = {
                name: getattr(error, name, None)
                for name in ("error_code", "message", "detail", "request_id", "status")
            }
        except Exception:
            return None

    if not isinstance(fields.get("error_code"), str):
        return None
    return fields


def _classify_upstream(
    fields: Dict[str, Any],
    original: Any,
    operation: Optional[str],
    field: Optional[str],
) -> ErrorResponse:
    code = fields["error_code"] or "UNKNOWN_SDK_ERROR"
    message = fields.get("message") or "An error occurred in the FAIM API"

    details = []
    if fields.get("detail"):
        details.append(f"Details: {_safe_str(fields['detail'])}")

    suggestion = SUGGESTIONS.get(code)
    if suggestion:
        details.append(f"Suggestion: {suggestion}")

    if operation:
        details.append(f"Operation: {operation}")
    if field:
        details.append(f"Field: {field}")

    _log_error(code, message, original)

    return ErrorResponse(
        error_code=code,
        message=FRIENDLY_MESSAGES.get(code, _safe_str(message)),
        field=field,
        details=" | ".join(details) if details else None,
    )


def _classify_exception(
    error: Exception, operation: Optional[str], field: Optional[str]
) -> ErrorResponse:
    message = _safe_str(error) or "Unknown error"

    detail_parts = [message]
    if operation:
        detail_parts.append(f"Operation: {operation}")
    details = " | ".join(detail_parts)

    lowered = message.lower()

    if isinstance(error, ConnectionError) or any(p in lowered for p in NETWORK_PATTERNS):
        _log_error(NETWORK_ERROR, message, error)
        return ErrorResponse(
            error_code=NETWORK_ERROR,
            message="Failed to connect to FAIM API. Please check your network connection.",
            field=field,
            details=details,
        )

    if isinstance(error, TimeoutError) or any(p in lowered for p in TIMEOUT_PATTERNS):
        _log_error(TIMEOUT_ERROR, message, error)
        return ErrorResponse(
            error_code=TIMEOUT_ERROR,
            message="Request to FAIM API timed out. Try a smaller forecast or longer timeout.",
            field=field,
            details=details,
        )

    # Programming error
    if isinstance(error, TypeError):
        _log_error(INTERNAL_SERVER_ERROR, message, error)
        return ErrorResponse(
            error_code=INTERNAL_SERVER_ERROR,
            message="An internal error occurred (type error). Please contact support.",
            field=field,
            details=details,
        )

    _log_error(INTERNAL_ERROR, message, error)
    return ErrorResponse(
        error_code=INTERNAL_ERROR,
        message="An unexpected error occurred",
        field=field,
        details=f"{type(error).__name__}: {details}",
    )


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return f"<unprintable {type(value).__name__}>"


def _safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception:
        return f"<unprintable {type(value).__name__}>"


def _log_error(code: str, message: str, original: Any) -> None:
    """Log a classified error. Production only logs the important codes."""
    if settings.is_production:
        if code in IMPORTANT_CODES:
            logger.error("[%s] %s", code, message)
        return

    logger.error("[%s] %s (%s)", code, message, _safe_repr(original))
