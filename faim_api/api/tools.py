"""Tool endpoints: forecast, forecast/prepare and list_models."""

import asyncio
import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from faim_api.engine.catalog import list_models
from faim_api.engine.errors import (
    AUTH_ERROR_CODES,
    INVALID_REQUEST,
    NETWORK_ERROR,
    RETRYABLE_ERROR_CODES,
    TIMEOUT_ERROR,
    VALIDATION_ERROR_CODES,
)
from faim_api.models.response import (
    ErrorResponse,
    ForecastResponse,
    ListModelsResponse,
    PreparedForecastResponse,
    ToolResult,
)
from faim_api.services.forecasting import ForecastService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tools", tags=["tools"])


class InvalidJSONBody(Exception):
    pass


def get_forecast_service(request: Request) -> ForecastService:
    """Get forecast service from app state."""
    service = getattr(request.app.state, "forecast_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Forecast service not initialized")
    return service


def status_code_for(error: ErrorResponse) -> int:
    """Map an error code to an HTTP status. The body is always the envelope."""
    code = error.error_code
    if code in VALIDATION_ERROR_CODES:
        return 400
    if code == NETWORK_ERROR:
        return 502
    if code == TIMEOUT_ERROR:
        return 504
    if code in AUTH_ERROR_CODES:
        return 401
    if code in RETRYABLE_ERROR_CODES:
        return 503
    return 500


def envelope_response(result: ToolResult) -> JSONResponse:
    status_code = 200 if result.success else status_code_for(result.error)
    return JSONResponse(
        status_code=status_code,
        content=result.model_dump(mode="json", exclude_none=True),
    )


async def read_json_body(request: Request) -> Any:
    """Decode the body as JSON. An empty body decodes to None."""
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except (ValueError, RecursionError) as e:
        raise InvalidJSONBody(str(e)) from e


def invalid_body_response(e: InvalidJSONBody) -> JSONResponse:
    return envelope_response(ToolResult.fail(ErrorResponse(
        error_code=INVALID_REQUEST,
        message="Request body must be valid JSON",
        field="root",
        details=str(e),
    )))


@router.post("/forecast", response_model=ToolResult[ForecastResponse])
async def forecast(
    raw_request: Request,
    service: ForecastService = Depends(get_forecast_service),
) -> JSONResponse:
    """
    Forecast a time series with a FAIM model.

    Accepts 1D, 2D or 3D arrays in ``x``; they are normalized to
    [batch, sequence, features] before the model is called. Failures are
    returned as an error envelope, never raised.
    """
    request_id = getattr(raw_request.state, "request_id", "unknown")

    try:
        raw = await read_json_body(raw_request)
    except InvalidJSONBody as e:
        logger.warning(f"Rejected non-JSON forecast body [{request_id}]")
        return invalid_body_response(e)

    # Validation and normalization are synchronous; keep them and the
    # upstream call off the event loop
    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(None, service.forecast, raw)

    if result.success:
        logger.info(f"Forecast succeeded [{request_id}]")
    else:
        logger.info(f"Forecast failed: {result.error.error_code} [{request_id}]")

    return envelope_response(result)


@router.post("/forecast/prepare", response_model=ToolResult[PreparedForecastResponse])
async def prepare_forecast(
    raw_request: Request,
    service: ForecastService = Depends(get_forecast_service),
) -> JSONResponse:
    """Validate and normalize a forecast request without calling the model."""
    try:
        raw = await read_json_body(raw_request)
    except InvalidJSONBody as e:
        return invalid_body_response(e)

    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(None, service.prepare_tool, raw)
    return envelope_response(result)


@router.get("/list_models", response_model=ToolResult[ListModelsResponse])
async def list_models_tool() -> JSONResponse:
    """List available forecasting models and their capabilities."""
    return envelope_response(list_models())
