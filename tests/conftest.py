"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from faim_api.main import create_app
from faim_api.services import ForecastService
from tests.mocks import MockForecaster


@pytest.fixture
def mock_forecaster():
    """Forecaster that answers without calling the FAIM API."""
    return MockForecaster()


@pytest.fixture
def service(mock_forecaster):
    """Forecast service wired to the mock forecaster."""
    return ForecastService(mock_forecaster)


@pytest.fixture
def client(mock_forecaster):
    """Create test client with the mock forecaster injected."""
    app = create_app(forecaster=mock_forecaster)
    with TestClient(app) as client:
        yield client
