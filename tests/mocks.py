"""Mock forecasters for testing without network access."""

from typing import List, Optional, Tuple

import numpy as np

from faim_api.engine.catalog import TIREX_QUANTILES
from faim_api.models.request import ForecastPayload
from faim_api.models.upstream import (
    UpstreamError,
    UpstreamForecast,
    UpstreamMetadata,
    UpstreamResponse,
)

DEFAULT_QUANTILES = [0.1, 0.5, 0.9]


class MockForecaster:
    """
    Mock FAIM forecaster.

    Repeats the last observation of every series for the whole horizon and
    adds symmetric offsets for quantiles. Can be told to fail with an
    upstream error or to raise an exception instead.

    Output layout:
    - point: [batch, horizon, features]
    - quantiles: [batch, horizon, num_quantiles, features]
    """

    def __init__(
        self,
        error: Optional[UpstreamError] = None,
        exception: Optional[Exception] = None,
        model_version: str = "1.0",
    ):
        self.error = error
        self.exception = exception
        self.model_version = model_version
        self.calls: List[Tuple[str, ForecastPayload]] = []

    def forecast(self, model: str, payload: ForecastPayload) -> UpstreamResponse:
        self.calls.append((model, payload))

        if self.exception is not None:
            raise self.exception
        if self.error is not None:
            return UpstreamResponse(success=False, error=self.error)

        x = np.asarray(payload.x, dtype=np.float64)
        batch, sequence, _ = x.shape
        point = np.repeat(x[:, -1:, :], payload.horizon, axis=1)

        if payload.output_type == "point":
            outputs = {"point": point.tolist()}
        else:
            # TiRex always answers with its fixed ladder
            levels = TIREX_QUANTILES if model == "tirex" else payload.quantiles or DEFAULT_QUANTILES
            offsets = np.asarray(levels) - 0.5
            quantiles = point[:, :, np.newaxis, :] + offsets[np.newaxis, np.newaxis, :, np.newaxis]
            outputs = {"quantiles": quantiles.tolist()}

        return UpstreamResponse(
            success=True,
            data=UpstreamForecast(
                outputs=outputs,
                metadata=UpstreamMetadata(
                    model_name=model,
                    model_version=self.model_version,
                    token_count=batch * sequence,
                ),
            ),
        )

    @property
    def last_payload(self) -> ForecastPayload:
        return self.calls[-1][1]
