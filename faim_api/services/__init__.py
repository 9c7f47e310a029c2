"""Forecast orchestration and the FAIM API client."""

from .client import FaimClient, Forecaster
from .forecasting import ForecastService, PreparedForecast

__all__ = ["FaimClient", "ForecastService", "Forecaster", "PreparedForecast"]
