"""FastAPI dependency that hands endpoints the shared metrics registry.

The registry lives on ``app.state`` (set by the lifespan in main.py)
instead of a module global, so each application instance owns its own.
"""

from fastapi import Request

from ..errors import MetricsUnavailableError
from ..services.metrics_registry import WeatherMetrics


def get_metrics(request: Request) -> WeatherMetrics:
    metrics = getattr(request.app.state, "metrics", None)
    if metrics is None:
        raise MetricsUnavailableError(getattr(request.app.state, "metrics_error", None))
    return metrics
