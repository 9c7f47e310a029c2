"""Models for results returned by the remote FAIM forecasting API."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class UpstreamError(BaseModel):
    """Structured failure reported by the FAIM API."""

    error_code: str
    message: Optional[str] = None
    detail: Optional[str] = None
    request_id: Optional[str] = None
    status: Optional[int] = None

    model_config = {"frozen": True, "extra": "allow"}


class UpstreamMetadata(BaseModel):
    model_name: str
    model_version: str
    token_count: int = 0


class UpstreamForecast(BaseModel):
    """Successful forecast: outputs keyed by output type."""

    outputs: Dict[str, Any] = Field(default_factory=dict)
    metadata: UpstreamMetadata


class UpstreamResponse(BaseModel):
    success: bool
    data: Optional[UpstreamForecast] = None
    error: Optional[UpstreamError] = None
