"""Request models for the forecast tools."""

from typing import List, Literal, Optional, Union, get_args

from pydantic import BaseModel, Field

ModelName = Literal["chronos2", "tirex"]
OutputType = Literal["point", "quantiles"]

SUPPORTED_MODELS = get_args(ModelName)
OUTPUT_TYPES = get_args(OutputType)
DEFAULT_MODEL: ModelName = "chronos2"
DEFAULT_OUTPUT_TYPE: OutputType = "point"

TimeSeriesInput = Union[List[float], List[List[float]], List[List[List[float]]]]
CanonicalTensor = List[List[List[float]]]


class ForecastRequest(BaseModel):
    """
    Typed forecast request.

    Only built by ``parse_forecast_request`` once the raw payload has passed
    validation, so downstream code never sees an unchecked shape.
    """

    model: ModelName = Field(
        default=DEFAULT_MODEL,
        description="Forecasting model to use",
    )

    x: TimeSeriesInput = Field(
        ...,
        description=(
            "Time series data: 1D (single series), 2D (rows of values) "
            "or 3D ([batch, sequence, features])"
        ),
    )

    horizon: int = Field(
        ...,
        description="Number of time steps to forecast",
        gt=0,
    )

    output_type: OutputType = Field(
        default=DEFAULT_OUTPUT_TYPE,
        description="'point' for a single estimate per step, 'quantiles' for intervals",
    )

    quantiles: Optional[List[float]] = Field(
        default=None,
        description="Quantile levels in [0, 1], used with output_type='quantiles'",
        min_length=1,
    )

    is_multivariate: bool = Field(
        default=False,
        description=(
            "Treat a 2D array as [sequence, features] instead of flattening it. "
            "Only honoured by models that accept multivariate input."
        ),
    )

    model_config = {"frozen": True, "json_schema_extra": {"example": {
        "model": "chronos2",
        "x": [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]],
        "horizon": 12,
        "output_type": "quantiles",
        "quantiles": [0.1, 0.5, 0.9],
        "is_multivariate": True,
    }}}


class ForecastPayload(BaseModel):
    """Exactly what the remote forecasting operation receives."""

    x: CanonicalTensor
    horizon: int
    output_type: OutputType
    quantiles: Optional[List[float]] = None

    model_config = {"frozen": True}
