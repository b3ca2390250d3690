"""GET /push/ - Station data ingestion.
   GET /weatherstation/updateweatherstation.php - Weather Underground upload protocol.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from ..services.ingest import ingest
from ..services.metrics_registry import WeatherMetrics
from .dependencies import get_metrics

router = APIRouter()


@router.get("/push/", response_class=PlainTextResponse)
def push(request: Request, metrics: WeatherMetrics = Depends(get_metrics)):
    """Update gauges from query parameters sent by an Ambient/Ecowitt station."""
    ingest(request.query_params, metrics)
    return "ok"


@router.get("/weatherstation/updateweatherstation.php", response_class=PlainTextResponse)
def wunderground_push(request: Request, metrics: WeatherMetrics = Depends(get_metrics)):
    """Accept stations configured to upload to Weather Underground.

    WU consoles treat any body starting with "success" as an accepted upload.
    """
    ingest(request.query_params, metrics)
    return "success\n"
