"""Response models for API endpoints."""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from faim_api.models.request import CanonicalTensor, OutputType

T = TypeVar("T")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    timestamp: str = Field(..., description="Timestamp of health check")


class ReadinessResponse(BaseModel):
    """Response model for readiness check."""

    ready: bool = Field(..., description="Whether service is ready")
    forecaster_configured: bool = Field(..., description="Whether a FAIM client is attached")


class LivenessResponse(BaseModel):
    """Response model for liveness check."""

    alive: bool = Field(..., description="Whether service is alive")


class ErrorResponse(BaseModel):
    """Uniform error shape returned by every tool."""

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    field: Optional[str] = Field(
        default=None, description="Offending request field, e.g. 'x' or 'quantiles'"
    )
    details: Optional[str] = Field(default=None, description="Diagnostic information")

    model_config = {"frozen": True}


class ToolResult(BaseModel, Generic[T]):
    """Success/failure envelope. Tools return this instead of raising."""

    success: bool
    data: Optional[T] = None
    error: Optional[ErrorResponse] = None

    @classmethod
    def ok(cls, data: T) -> "ToolResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: ErrorResponse) -> "ToolResult[T]":
        return cls(success=False, error=error)


class ForecastMetadata(BaseModel):
    """Metadata about the forecast."""

    token_count: int = Field(..., description="Tokens billed for the request")
    duration_ms: float = Field(..., description="Time spent in the forecasting call")


class ShapeInfo(BaseModel):
    """Array shapes for debugging."""

    original_shape: List[int] = Field(..., description="Shape of x as submitted")
    input_shape: List[int] = Field(..., description="[batch, sequence, features] sent to the model")
    output_shape: List[int] = Field(..., description="Shape of the returned forecast array")


class ForecastResponse(BaseModel):
    """Response from the forecast tool."""

    model_name: str
    model_version: str
    output_type: OutputType
    forecast: Dict[str, Any] = Field(
        ..., description="{'point': [...]} or {'quantiles': [...]} depending on output_type"
    )
    metadata: ForecastMetadata
    shape_info: ShapeInfo


class PreparedForecastResponse(BaseModel):
    """Validated and normalized input, without calling the model."""

    model: str
    horizon: int
    output_type: OutputType
    quantiles: Optional[List[float]] = None
    tensor: CanonicalTensor
    original_shape: List[int]
    input_shape: List[int]


class ModelInfo(BaseModel):
    """Capabilities of one forecasting model."""

    id: str
    name: str
    version: str
    description: str
    supported_output_types: List[OutputType]
    supports_quantiles: bool
    supports_custom_quantiles: bool
    supports_multivariate: bool

    model_config = {"frozen": True}


class ListModelsResponse(BaseModel):
    """Response from the list_models tool."""

    models: List[ModelInfo]
    timestamp: str
