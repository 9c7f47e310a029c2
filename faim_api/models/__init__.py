"""Pydantic models for request and response validation."""

from .request import ForecastPayload, ForecastRequest
from .response import (
    ErrorResponse,
    ForecastMetadata,
    ForecastResponse,
    HealthResponse,
    ListModelsResponse,
    ModelInfo,
    PreparedForecastResponse,
    ShapeInfo,
    ToolResult,
)
from .upstream import UpstreamError, UpstreamForecast, UpstreamMetadata, UpstreamResponse

__all__ = [
    "ForecastPayload",
    "ForecastRequest",
    "ErrorResponse",
    "ForecastMetadata",
    "ForecastResponse",
    "HealthResponse",
    "ListModelsResponse",
    "ModelInfo",
    "PreparedForecastResponse",
    "ShapeInfo",
    "ToolResult",
    "UpstreamError",
    "UpstreamForecast",
    "UpstreamMetadata",
    "UpstreamResponse",
]
