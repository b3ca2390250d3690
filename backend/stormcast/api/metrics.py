"""GET /metrics - Prometheus scrape endpoint."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from ..services.metrics_registry import CONTENT_TYPE, WeatherMetrics
from .dependencies import get_metrics

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/metrics")
def get_metrics_exposition(metrics: WeatherMetrics = Depends(get_metrics)):
    """Return the current value of every gauge; never cached."""
    logger.debug("Metrics endpoint called")
    return Response(content=metrics.encode(), media_type=CONTENT_TYPE)
