"""
Input validation for the forecast tool.

Checks run in a fixed order and stop at the first violation, so a request
with several problems always reports the same one. Errors are returned as
``ErrorResponse`` values rather than raised.
"""

import json
import math
import reprlib
from numbers import Integral, Real
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from faim_api.engine.errors import (
    INVALID_PARAMETER,
    INVALID_REQUEST,
    INVALID_VALUE_RANGE,
    MISSING_REQUIRED_FIELD,
)
from faim_api.engine.shape import is_array
from faim_api.models.request import (
    DEFAULT_MODEL,
    DEFAULT_OUTPUT_TYPE,
    OUTPUT_TYPES,
    SUPPORTED_MODELS,
    ForecastRequest,
)
from faim_api.models.response import ErrorResponse

DEFAULT_MAX_HORIZON = 1024


def _error(code: str, message: str, field: str, details: Optional[str] = None) -> ErrorResponse:
    return ErrorResponse(error_code=code, message=message, field=field, details=details)


def _got(value: Any) -> str:
    try:
        return f"Got: {reprlib.repr(value)}"
    except ValueError:
        # int too large to render
        return f"Got: <{type(value).__name__}>"


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_finite_number(value: Any) -> bool:
    """A real number that also fits in a float64."""
    if not _is_number(value):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def validate_forecast_request(
    raw: Any, max_horizon: int = DEFAULT_MAX_HORIZON
) -> Optional[ErrorResponse]:
    """
    Validate a raw forecast request.

    Args:
        raw: Untyped request, normally a dict decoded from JSON
        max_horizon: Largest horizon accepted by this deployment

    Returns:
        None if valid, otherwise the first violation found
    """
    error, _ = _check_request(raw, max_horizon)
    return error


def parse_forecast_request(
    raw: Any, max_horizon: int = DEFAULT_MAX_HORIZON
) -> Union[ForecastRequest, ErrorResponse]:
    """
    Validate a raw request and build the typed ``ForecastRequest``.

    Defaults are applied here and a JSON-encoded ``x`` is decoded. Callers
    discriminate the result with ``isinstance``.
    """
    error, x = _check_request(raw, max_horizon)
    if error is not None:
        return error

    quantiles = raw.get("quantiles")
    return ForecastRequest(
        model=raw.get("model") or DEFAULT_MODEL,
        x=x,
        horizon=int(raw["horizon"]),
        output_type=raw.get("output_type") or DEFAULT_OUTPUT_TYPE,
        quantiles=list(quantiles) if quantiles is not None else None,
        is_multivariate=bool(raw.get("is_multivariate", False)),
    )


def _check_request(raw: Any, max_horizon: int) -> Tuple[Optional[ErrorResponse], Any]:
    """Run every check in order. Returns (error, decoded x)."""
    if not isinstance(raw, Mapping):
        return _error(INVALID_REQUEST, "Request must be a valid object", "root"), None

    model = raw.get("model")
    if model is not None and (not isinstance(model, str) or model not in SUPPORTED_MODELS):
        return _error(
            INVALID_PARAMETER,
            "Model must be either \"chronos2\" or \"tirex\"",
            "model",
            _got(model),
        ), None

    horizon_error = _check_horizon(raw.get("horizon"), max_horizon)
    if horizon_error is not None:
        return horizon_error, None

    x = raw.get("x")
    if x is None:
        return _error(
            MISSING_REQUIRED_FIELD, "Missing required field: x (time series data)", "x"
        ), None

    if isinstance(x, str):
        try:
            x = json.loads(x)
        except (ValueError, RecursionError) as e:
            return _error(
                INVALID_PARAMETER, "Failed to parse x parameter as JSON", "x", str(e)
            ), None

    x_error = _check_array_input(x)
    if x_error is not None:
        return x_error, None

    output_type = raw.get("output_type")
    if output_type is not None:
        if not isinstance(output_type, str):
            return _error(INVALID_PARAMETER, "output_type must be a string", "output_type"), None
        if output_type not in OUTPUT_TYPES:
            return _error(
                INVALID_PARAMETER,
                f"output_type must be one of: {', '.join(OUTPUT_TYPES)}",
                "output_type",
                _got(output_type),
            ), None

    quantiles = raw.get("quantiles")
    if quantiles is not None:
        quantiles_error = _check_quantiles(quantiles)
        if quantiles_error is not None:
            return quantiles_error, None

    is_multivariate = raw.get("is_multivariate")
    if is_multivariate is not None and not isinstance(is_multivariate, bool):
        return _error(
            INVALID_PARAMETER,
            "is_multivariate must be a boolean",
            "is_multivariate",
            _got(is_multivariate),
        ), None

    return None, x


def _check_horizon(horizon: Any, max_horizon: int) -> Optional[ErrorResponse]:
    if horizon is None:
        return _error(MISSING_REQUIRED_FIELD, "Missing required field: horizon", "horizon")

    # Integers of any size are finite; oversized ones fail the range check
    is_integer = isinstance(horizon, Integral) and not isinstance(horizon, bool)
    if not is_integer and not _is_finite_number(horizon):
        return _error(
            INVALID_PARAMETER, "Horizon must be a finite number", "horizon", _got(horizon)
        )

    if horizon != int(horizon):
        return _error(INVALID_PARAMETER, "Horizon must be an integer", "horizon", _got(horizon))

    if horizon <= 0:
        return _error(
            INVALID_VALUE_RANGE, "Horizon must be greater than 0", "horizon", _got(horizon)
        )

    # Upper bound keeps the response size and upstream memory in check
    if horizon > max_horizon:
        return _error(
            INVALID_VALUE_RANGE,
            f"Horizon is too large. Maximum supported is {max_horizon}",
            "horizon",
            _got(horizon),
        )

    return None


def _check_quantiles(quantiles: Any) -> Optional[ErrorResponse]:
    if not is_array(quantiles):
        return _error(INVALID_PARAMETER, "quantiles must be an array", "quantiles", _got(quantiles))

    if len(quantiles) == 0:
        return _error(INVALID_VALUE_RANGE, "quantiles array must not be empty", "quantiles")

    for i, q in enumerate(quantiles):
        if not _is_finite_number(q):
            return _error(
                INVALID_PARAMETER, f"quantiles[{i}] must be a finite number", "quantiles", _got(q)
            )
        if q < 0 or q > 1:
            return _error(
                INVALID_VALUE_RANGE, f"quantiles[{i}] must be between 0 and 1", "quantiles", _got(q)
            )

    return None


def _check_array_input(x: Any) -> Optional[ErrorResponse]:
    """
    Check that x is a rectangular 1D, 2D or 3D array of finite numbers.

    The first element decides the rank; every other element must agree with
    it. Rows of unequal length are rejected rather than truncated or padded.
    """
    if not is_array(x):
        return _error(
            INVALID_PARAMETER, "Time series data must be an array", "x", f"Got: {type(x).__name__}"
        )

    if len(x) == 0:
        return _error(INVALID_VALUE_RANGE, "Time series data array cannot be empty", "x")

    first = x[0]

    # 1D: [1, 2, 3]
    if _is_number(first):
        return _check_numbers(x, "x")

    if not is_array(first):
        return _error(
            INVALID_PARAMETER,
            "Time series data must be an array of numbers or nested arrays",
            "x",
            f"First element is: {type(first).__name__}",
        )

    if len(first) == 0:
        return _error(INVALID_PARAMETER, "x[0] cannot be an empty array", "x")

    inner = first[0]

    # 2D: [[1, 2], [3, 4]]
    if _is_number(inner):
        for i, row in enumerate(x):
            row_error = _check_row(row, f"x[{i}]", len(first))
            if row_error is None:
                row_error = _check_numbers(row, f"x[{i}]")
            if row_error is not None:
                return row_error
        return None

    # 3D: [[[1], [2]], [[3], [4]]]
    if is_array(inner):
        if len(inner) == 0:
            return _error(INVALID_PARAMETER, "x[0][0] cannot be an empty array", "x")

        for i, row in enumerate(x):
            row_error = _check_row(row, f"x[{i}]", len(first))
            if row_error is not None:
                return row_error
            for j, features in enumerate(row):
                features_error = _check_row(features, f"x[{i}][{j}]", len(inner))
                if features_error is None:
                    features_error = _check_numbers(features, f"x[{i}][{j}]")
                if features_error is not None:
                    return features_error
        return None

    return _error(
        INVALID_PARAMETER,
        "x[0][0] must be either a number or an array",
        "x",
        f"Got: {type(inner).__name__}",
    )


def _check_row(row: Any, path: str, expected_length: int) -> Optional[ErrorResponse]:
    if not is_array(row):
        return _error(INVALID_PARAMETER, f"{path} must be an array", "x", f"Got: {type(row).__name__}")

    if len(row) == 0:
        return _error(INVALID_PARAMETER, f"{path} cannot be an empty array", "x")

    if len(row) != expected_length:
        return _error(
            INVALID_PARAMETER,
            f"{path} has length {len(row)}, expected {expected_length}",
            "x",
            "Nested arrays in x must all have the same length",
        )

    return None


def _check_numbers(values: Sequence[Any], path: str) -> Optional[ErrorResponse]:
    for i, value in enumerate(values):
        if not _is_finite_number(value):
            return _error(
                INVALID_PARAMETER, f"{path}[{i}] must be a finite number", "x", _got(value)
            )
    return None
