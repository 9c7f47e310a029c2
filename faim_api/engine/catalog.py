"""Static catalog of the forecasting models exposed by the FAIM API."""

import logging
from datetime import UTC, datetime
from typing import Dict

from faim_api.models.response import ListModelsResponse, ModelInfo, ToolResult

logger = logging.getLogger(__name__)

# TiRex ignores custom quantiles and always answers with this ladder
TIREX_QUANTILES = [0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9]

MODEL_CATALOG: Dict[str, ModelInfo] = {
    "chronos2": ModelInfo(
        id="chronos2",
        name="Chronos2",
        version="1.0",
        description=(
            "General-purpose time series forecasting model. Supports point and "
            "probabilistic (quantile) forecasting with custom quantile levels, "
            "for univariate and multivariate series."
        ),
        supported_output_types=["point", "quantiles"],
        supports_quantiles=True,
        supports_custom_quantiles=True,
        supports_multivariate=True,
    ),
    "tirex": ModelInfo(
        id="tirex",
        name="TiRex",
        version="1.0",
        description=(
            "Fast forecasting model for univariate series. Supports point and "
            "quantile forecasting on the fixed 0.1-0.9 quantile ladder; custom "
            "quantiles are ignored."
        ),
        supported_output_types=["point", "quantiles"],
        supports_quantiles=True,
        supports_custom_quantiles=False,
        supports_multivariate=False,
    ),
}


def supports_multivariate(model: str) -> bool:
    """Whether a model accepts [sequence, features] input. Unknown models do not."""
    info = MODEL_CATALOG.get(model)
    return info is not None and info.supports_multivariate


def list_models() -> ToolResult[ListModelsResponse]:
    """Return the available models and their capabilities."""
    response = ListModelsResponse(
        models=list(MODEL_CATALOG.values()),
        timestamp=datetime.now(UTC).isoformat(),
    )
    logger.debug(f"Listing {len(response.models)} models")
    return ToolResult[ListModelsResponse].ok(response)
