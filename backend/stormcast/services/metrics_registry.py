"""Prometheus gauge registry for station readings.

One gauge per Reading field, registered on a private CollectorRegistry so
the exposition contains weather gauges only (no process/platform
collectors). Gauges hold the last written value; fields absent from a
Reading leave their gauge untouched.

prometheus_client guards each gauge value with its own mutex, so
concurrent updates to different fields never contend and no registry-wide
lock is needed.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from prometheus_client import CollectorRegistry, Gauge, generate_latest

from ..errors import MetricRegistrationError, MetricsEncodeError
from ..schemas.reading import Reading
from .calculations import round_to

logger = logging.getLogger(__name__)

# Exposition format 0.0.4, pinned rather than taken from prometheus_client
# whose CONTENT_TYPE_LATEST tracks newer format versions.
CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"


@dataclass(frozen=True)
class GaugeSpec:
    """Definition of a single gauge and the Reading field that feeds it."""
    field: str
    name: str
    help: str
    places: Optional[int]  # decimal places; None = integer, stored as-is


GAUGE_CATALOG: tuple[GaugeSpec, ...] = (
    # outdoor
    GaugeSpec("tempf", "weather_temperature_fahrenheit",
              "Outdoor temperature in Fahrenheit", 1),
    GaugeSpec("humidity", "weather_humidity_percent",
              "Outdoor relative humidity percentage", None),
    GaugeSpec("windspeedmph", "weather_wind_speed_mph",
              "Current wind speed in mph", 2),
    GaugeSpec("windgustmph", "weather_wind_gust_mph",
              "Current wind gust speed in mph", 2),
    GaugeSpec("maxdailygust", "weather_max_daily_gust_mph",
              "Maximum wind gust today in mph", 2),
    GaugeSpec("winddir", "weather_wind_direction_degrees",
              "Current wind direction in degrees (0-359)", None),
    GaugeSpec("winddir_avg10m", "weather_wind_direction_avg10m_degrees",
              "10-minute average wind direction in degrees", None),
    GaugeSpec("uv", "weather_uv_index",
              "Current UV index level", None),
    GaugeSpec("solarradiation", "weather_solar_radiation_wm2",
              "Solar radiation in watts per square meter", 2),
    # rainfall
    GaugeSpec("hourlyrainin", "weather_rain_hourly_inches",
              "Rainfall in the last hour", 3),
    GaugeSpec("eventrainin", "weather_rain_event_inches",
              "Rainfall for the current rain event", 3),
    GaugeSpec("dailyrainin", "weather_rain_daily_inches",
              "Total rainfall today", 3),
    GaugeSpec("weeklyrainin", "weather_rain_weekly_inches",
              "Total rainfall this week", 3),
    GaugeSpec("monthlyrainin", "weather_rain_monthly_inches",
              "Total rainfall this month", 3),
    GaugeSpec("yearlyrainin", "weather_rain_yearly_inches",
              "Total rainfall this year", 3),
    # indoor
    GaugeSpec("tempinf", "weather_indoor_temperature_fahrenheit",
              "Indoor temperature in Fahrenheit", 1),
    GaugeSpec("humidityin", "weather_indoor_humidity_percent",
              "Indoor relative humidity percentage", None),
    GaugeSpec("baromrelin", "weather_barometer_relative_inhg",
              "Relative barometric pressure in inches of mercury", 3),
    GaugeSpec("baromabsin", "weather_barometer_absolute_inhg",
              "Absolute barometric pressure in inches of mercury", 3),
    # battery
    GaugeSpec("battout", "weather_battery_outdoor",
              "Outdoor sensor battery status (0=low, 1=ok)", None),
    GaugeSpec("battin", "weather_battery_indoor",
              "Indoor sensor battery status (0=low, 1=ok)", None),
)


class WeatherMetrics:
    """Owns the gauge registry for the lifetime of the process.

    Construct once at startup; construction raises MetricRegistrationError
    naming the first gauge that could not be created or registered.
    """

    def __init__(self, catalog: Sequence[GaugeSpec] = GAUGE_CATALOG) -> None:
        self.registry = CollectorRegistry()
        self._gauges: dict[str, tuple[GaugeSpec, Gauge]] = {}

        for spec in catalog:
            try:
                gauge = Gauge(spec.name, spec.help, registry=None)
                self.registry.register(gauge)
            except ValueError as exc:
                raise MetricRegistrationError(spec.name, exc) from exc
            if spec.field in self._gauges:
                raise MetricRegistrationError(
                    spec.name,
                    ValueError(f"field '{spec.field}' is already bound to "
                               f"{self._gauges[spec.field][0].name}"),
                )
            self._gauges[spec.field] = (spec, gauge)

        logger.info("Registered %d gauges", len(self._gauges))

    @property
    def gauge_names(self) -> list[str]:
        return [spec.name for spec, _ in self._gauges.values()]

    def update(self, reading: Reading) -> None:
        """Overwrite the gauges whose fields are present in the reading."""
        for field, (spec, gauge) in self._gauges.items():
            value = getattr(reading, field, None)
            if value is None:
                continue
            if spec.places is None:
                gauge.set(float(value))
            else:
                gauge.set(round_to(value, spec.places))

    def encode(self) -> bytes:
        """Serialize every gauge in the text exposition format."""
        try:
            return generate_latest(self.registry)
        except Exception as exc:
            raise MetricsEncodeError(exc) from exc

    def value(self, field: str) -> float:
        """Current value of the gauge fed by a Reading field."""
        spec, _ = self._gauges[field]
        return self.registry.get_sample_value(spec.name)

    def snapshot(self) -> dict[str, float]:
        """Current value of every gauge, keyed by metric name."""
        return {
            spec.name: self.registry.get_sample_value(spec.name)
            for spec, _ in self._gauges.values()
        }
