"""GET /health - Liveness check for load balancers and orchestrators.

Re-checks the registry on every call rather than assuming a running
process is healthy.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from ..errors import MetricsUnavailableError
from .dependencies import get_metrics

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health", response_class=PlainTextResponse)
def get_health(request: Request):
    try:
        get_metrics(request)
    except MetricsUnavailableError as exc:
        logger.error("Health check failed: %s", exc)
        return PlainTextResponse(f"unhealthy: {exc}", status_code=503)
    return "ok"
