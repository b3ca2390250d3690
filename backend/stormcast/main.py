"""FastAPI application factory and lifespan for the stormcast bridge."""

import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from .api.router import api_router
from .config import settings
from .errors import (
    MetricRegistrationError,
    ParseError,
    SerializeError,
    StormcastError,
)
from .services.metrics_registry import WeatherMetrics

# Configure logging for our app (uvicorn only configures its own loggers)
logging.basicConfig(
    level=settings.log_level,
    format="%(levelname)s:     %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the metrics registry before the first request is accepted.

    A registration failure propagates out of startup so the server never
    begins serving with a broken registry.
    """
    if app.state.metrics is None:
        try:
            app.state.metrics = app.state.metrics_factory()
        except MetricRegistrationError as exc:
            app.state.metrics_error = str(exc)
            logger.error("Failed to initialize metrics: %s", exc)
            raise
    logger.info("Metrics registry ready (%d gauges)", len(app.state.metrics.gauge_names))

    yield

    logger.info("Application shutdown complete")


async def _stormcast_error_handler(request: Request, exc: StormcastError):
    """Client errors -> 400, everything else -> 500. Always logged."""
    if isinstance(exc, (ParseError, SerializeError)):
        logger.warning("Rejected %s from %s: %s",
                       request.url.path, request.client.host if request.client else "?", exc)
        return PlainTextResponse(str(exc), status_code=400)
    logger.error("%s failed: %s", request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=500)


def create_app(
    metrics: Optional[WeatherMetrics] = None,
    metrics_factory: Callable[[], WeatherMetrics] = WeatherMetrics,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Pass ``metrics`` to reuse an existing registry; otherwise one is built
    with ``metrics_factory`` during startup.
    """
    app = FastAPI(
        title="stormcast",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.metrics = metrics
    app.state.metrics_factory = metrics_factory
    app.state.metrics_error = None

    app.add_exception_handler(StormcastError, _stormcast_error_handler)
    app.include_router(api_router)

    return app


# Application instance
app = create_app()


def run() -> None:
    """Console entry point: serve on the configured bind address."""
    import uvicorn

    logger.info("Starting stormcast on %s", settings.bind)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        lifespan="on",
    )


if __name__ == "__main__":
    run()
