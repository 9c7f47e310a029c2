"""Forecast service: validation, normalization, model call, error handling."""

import logging
import time
from typing import Any, List, Union

from pydantic import BaseModel

from faim_api.engine.errors import classify_error
from faim_api.engine.normalization import normalize_input
from faim_api.engine.shape import get_array_shape
from faim_api.engine.validation import DEFAULT_MAX_HORIZON, parse_forecast_request
from faim_api.models.request import CanonicalTensor, ForecastPayload, ForecastRequest
from faim_api.models.response import (
    ErrorResponse,
    ForecastMetadata,
    ForecastResponse,
    PreparedForecastResponse,
    ShapeInfo,
    ToolResult,
)
from faim_api.services.client import Forecaster

logger = logging.getLogger(__name__)


class PreparedForecast(BaseModel):
    """A validated request together with its canonical tensor."""

    request: ForecastRequest
    tensor: CanonicalTensor
    original_shape: List[int]
    input_shape: List[int]

    model_config = {"frozen": True}

    def to_payload(self) -> ForecastPayload:
        return ForecastPayload(
            x=self.tensor,
            horizon=self.request.horizon,
            output_type=self.request.output_type,
            quantiles=self.request.quantiles,
        )

    def to_response(self) -> PreparedForecastResponse:
        return PreparedForecastResponse(
            model=self.request.model,
            horizon=self.request.horizon,
            output_type=self.request.output_type,
            quantiles=self.request.quantiles,
            tensor=self.tensor,
            original_shape=self.original_shape,
            input_shape=self.input_shape,
        )


class ForecastService:
    """
    Runs forecast requests end to end.

    Responsibilities:
    - Validate the raw request and build a typed one
    - Normalize x to [batch, sequence, features]
    - Call the injected forecaster
    - Turn every failure into an error envelope

    Nothing here is shared between calls, so one instance can serve
    concurrent requests.
    """

    def __init__(self, forecaster: Forecaster, max_horizon: int = DEFAULT_MAX_HORIZON):
        self.forecaster = forecaster
        self.max_horizon = max_horizon

    def prepare(self, raw: Any) -> Union[PreparedForecast, ErrorResponse]:
        """
        Validate and normalize a raw request without calling the model.

        Returns:
            PreparedForecast on success, ErrorResponse on validation failure
        """
        parsed = parse_forecast_request(raw, self.max_horizon)
        if isinstance(parsed, ErrorResponse):
            logger.info(f"Validation failed: {parsed.error_code} on {parsed.field}")
            return parsed

        tensor = normalize_input(parsed.x, parsed.model, parsed.is_multivariate)
        return PreparedForecast(
            request=parsed,
            tensor=tensor,
            original_shape=get_array_shape(parsed.x),
            input_shape=get_array_shape(tensor),
        )

    def prepare_tool(self, raw: Any) -> ToolResult[PreparedForecastResponse]:
        """``prepare`` wrapped in the tool envelope. Never raises."""
        try:
            prepared = self.prepare(raw)
        except Exception as e:
            return ToolResult[PreparedForecastResponse].fail(
                classify_error(e, operation="prepare")
            )

        if isinstance(prepared, ErrorResponse):
            return ToolResult[PreparedForecastResponse].fail(prepared)
        return ToolResult[PreparedForecastResponse].ok(prepared.to_response())

    def forecast(self, raw: Any) -> ToolResult[ForecastResponse]:
        """
        Run a forecast for a raw, untyped request. Never raises.

        Args:
            raw: Request decoded from the transport layer

        Returns:
            Envelope with either a ForecastResponse or an ErrorResponse
        """
        try:
            return self._forecast(raw)
        except Exception as e:
            logger.error(f"Unexpected error during forecast: {e}")
            return ToolResult[ForecastResponse].fail(classify_error(e, operation="forecast"))

    def _forecast(self, raw: Any) -> ToolResult[ForecastResponse]:
        prepared = self.prepare(raw)
        if isinstance(prepared, ErrorResponse):
            return ToolResult[ForecastResponse].fail(prepared)

        request = prepared.request
        logger.info(
            f"Forecast request: model={request.model} horizon={request.horizon} "
            f"output_type={request.output_type} input_shape={prepared.input_shape}"
        )

        start_time = time.time()
        result = self.forecaster.forecast(request.model, prepared.to_payload())
        duration_ms = (time.time() - start_time) * 1000

        if not result.success or result.data is None:
            return ToolResult[ForecastResponse].fail(
                classify_error(result.error, operation=f"{request.model} forecast")
            )

        outputs = result.data.outputs
        if request.output_type not in outputs:
            raise ValueError(
                f"Forecast response has no '{request.output_type}' output "
                f"(got: {', '.join(outputs) or 'nothing'})"
            )
        predictions = outputs[request.output_type]

        metadata = result.data.metadata
        response = ForecastResponse(
            model_name=metadata.model_name,
            model_version=metadata.model_version,
            output_type=request.output_type,
            forecast={request.output_type: predictions},
            metadata=ForecastMetadata(
                token_count=metadata.token_count,
                duration_ms=duration_ms,
            ),
            shape_info=ShapeInfo(
                original_shape=prepared.original_shape,
                input_shape=prepared.input_shape,
                output_shape=get_array_shape(predictions),
            ),
        )

        logger.info(
            f"Forecast completed: {request.model} output_shape="
            f"{response.shape_info.output_shape} in {duration_ms:.2f}ms"
        )
        return ToolResult[ForecastResponse].ok(response)
