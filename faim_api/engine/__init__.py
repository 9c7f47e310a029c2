"""Request validation, tensor normalization and error classification."""

from .catalog import MODEL_CATALOG, list_models, supports_multivariate
from .errors import classify_error, is_auth_error, is_retryable_error
from .normalization import normalize_input
from .shape import get_array_shape
from .validation import DEFAULT_MAX_HORIZON, parse_forecast_request, validate_forecast_request

__all__ = [
    "DEFAULT_MAX_HORIZON",
    "MODEL_CATALOG",
    "classify_error",
    "get_array_shape",
    "is_auth_error",
    "is_retryable_error",
    "list_models",
    "normalize_input",
    "parse_forecast_request",
    "supports_multivariate",
    "validate_forecast_request",
]
