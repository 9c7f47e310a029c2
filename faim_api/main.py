"""Main FastAPI application for the FAIM forecast API."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from faim_api.api import health_router, tools_router
from faim_api.config import Settings, settings
from faim_api.middleware import RequestIDMiddleware, RequestLoggingMiddleware
from faim_api.services import FaimClient, ForecastService, Forecaster

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(
    forecaster: Optional[Forecaster] = None,
    app_settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        forecaster: Forecasting backend to use. When omitted, a FaimClient is
            built from settings at startup (and startup fails without an API key).
        app_settings: Settings override, mainly for tests
    """
    config = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting FAIM forecast API...")

        client: Optional[FaimClient] = None
        backend = forecaster
        if backend is None:
            client = FaimClient.from_settings(config)
            backend = client

        app.state.forecast_service = ForecastService(backend, max_horizon=config.MAX_HORIZON)

        try:
            logger.info("FAIM forecast API started successfully")
            yield
        finally:
            logger.info("Shutting down FAIM forecast API...")
            app.state.forecast_service = None
            if client is not None:
                client.close()
            logger.info("Shutdown complete")

    app = FastAPI(
        title=config.API_TITLE,
        version=config.API_VERSION,
        description=(
            "Tool-calling API for time series forecasting with FAIM models "
            "(Chronos2, TiRex). Validates requests and normalizes 1D/2D/3D "
            "input to the [batch, sequence, features] layout the models expect."
        ),
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Added last so it runs first: the logging middleware needs the request ID
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.include_router(health_router)
    app.include_router(tools_router, prefix=config.API_PREFIX)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "faim_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        workers=settings.WORKERS,
        log_level=settings.LOG_LEVEL.lower(),
        reload=False
    )
