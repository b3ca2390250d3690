"""Station push ingestion: decode the parameters, then update the gauges.

Each call is independent. A request that fails to decode raises before
any gauge is touched, so earlier values survive malformed pushes.
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..protocol.push_params import parse_reading
from ..schemas.reading import Reading
from .metrics_registry import WeatherMetrics

logger = logging.getLogger(__name__)


def ingest(params: Mapping[Any, Any], metrics: WeatherMetrics) -> Reading:
    """Apply one station push to the registry and return the decoded reading."""
    logger.debug("Received weather data: %s", dict(params))

    reading = parse_reading(params)
    metrics.update(reading)

    logger.info(
        "Weather data updated: %d fields, %d unrecognized",
        len(reading.present_fields()), len(reading.unrecognized),
    )
    return reading
