"""Client for the remote FAIM forecasting API."""

import json
import logging
from typing import Any, Optional, Protocol

import httpx

from faim_api.config import Settings
from faim_api.models.request import ForecastPayload
from faim_api.models.upstream import UpstreamError, UpstreamForecast, UpstreamResponse

logger = logging.getLogger(__name__)

STATUS_ERROR_CODES = {
    401: "AUTHENTICATION_FAILED",
    402: "INSUFFICIENT_FUNDS",
    403: "AUTHORIZATION_FAILED",
    404: "MODEL_NOT_FOUND",
    422: "VALIDATION_ERROR",
    429: "RATE_LIMIT_EXCEEDED",
    503: "RESOURCE_EXHAUSTED",
    504: "TIMEOUT_ERROR",
}

MAX_DETAIL_LENGTH = 500


class Forecaster(Protocol):
    """Anything that can run a forecast on a canonical tensor."""

    def forecast(self, model: str, payload: ForecastPayload) -> UpstreamResponse:
        ...


class FaimClient:
    """
    Synchronous FAIM API client.

    Upstream failures come back as ``UpstreamResponse(success=False)``.
    Transport problems (connection refused, timeouts) raise the underlying
    httpx exception and are classified by the caller.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.faim.it.com",
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._client = httpx.Client(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            headers={
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            },
            transport=transport,
        )

    @classmethod
    def from_settings(cls, config: Settings) -> "FaimClient":
        """
        Build a client from settings.

        Raises:
            RuntimeError: If FAIM_API_KEY is not set
        """
        if not config.FAIM_API_KEY:
            raise RuntimeError(
                "FAIM_API_KEY environment variable is not set. "
                "Please set it before starting the server."
            )
        logger.info(f"FAIM client configured for {config.FAIM_API_BASE_URL}")
        return cls(
            api_key=config.FAIM_API_KEY,
            base_url=config.FAIM_API_BASE_URL,
            timeout=config.REQUEST_TIMEOUT,
        )

    def forecast(self, model: str, payload: ForecastPayload) -> UpstreamResponse:
        """Run a forecast on the given model."""
        response = self._client.post(
            f"/v1/forecast/{model}",
            json=payload.model_dump(exclude_none=True),
        )

        if response.is_success:
            return UpstreamResponse(
                success=True,
                data=UpstreamForecast.model_validate(response.json()),
            )

        error = self._error_from_response(response)
        logger.warning(
            f"FAIM API returned {response.status_code} ({error.error_code}) "
            f"for {model} forecast"
        )
        return UpstreamResponse(success=False, error=error)

    def close(self) -> None:
        self._client.close()

    def _error_from_response(self, response: httpx.Response) -> UpstreamError:
        request_id = response.headers.get("x-request-id")

        body = self._json_body(response)
        if isinstance(body, dict) and isinstance(body.get("error_code"), str):
            fields = {k: v for k, v in body.items() if k not in ("status", "request_id")}
            for name in ("message", "detail"):
                if name in fields:
                    fields[name] = _as_text(fields[name])
            return UpstreamError(
                **fields,
                status=response.status_code,
                request_id=_as_text(body.get("request_id")) or request_id,
            )

        code = STATUS_ERROR_CODES.get(response.status_code, "UPSTREAM_HTTP_ERROR")
        return UpstreamError(
            error_code=code,
            message=f"FAIM API request failed with status {response.status_code}",
            detail=response.text[:MAX_DETAIL_LENGTH] or None,
            request_id=request_id,
            status=response.status_code,
        )

    @staticmethod
    def _json_body(response: httpx.Response) -> Optional[Any]:
        try:
            return response.json()
        except (ValueError, RecursionError):
            return None


def _as_text(value: Any) -> Optional[str]:
    """Render a JSON error field as text. FastAPI-style ``detail`` is often a list."""
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, default=str)
