"""Error types raised by the ingestion and metrics pipeline.

Client-side failures (ParseError, SerializeError) map to HTTP 400; every
other StormcastError maps to a server error. See main.py for the handlers.
"""

from typing import Optional


class StormcastError(Exception):
    """Base class for all pipeline errors."""


class ParseError(StormcastError):
    """A recognized field's value could not be parsed into its declared type."""

    def __init__(self, field: str, value: str, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(
            f"failed to parse weather data: invalid value {value!r} "
            f"for field '{field}': {reason}"
        )


class SerializeError(StormcastError):
    """The raw parameter map could not be normalized before decoding."""

    def __init__(self, key: object, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"failed to serialize query params: {key!r}: {reason}")


class MetricsEncodeError(StormcastError):
    """Gauges could not be serialized to the exposition format."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"failed to encode metrics: {cause}")


class MetricRegistrationError(StormcastError):
    """A gauge could not be created or registered."""

    def __init__(self, name: str, cause: Exception) -> None:
        self.name = name
        self.cause = cause
        super().__init__(f"failed to register metric '{name}': {cause}")


class MetricsUnavailableError(StormcastError):
    """The metrics registry was never constructed for this process."""

    def __init__(self, cause: Optional[str] = None) -> None:
        self.cause = cause or "metrics registry not initialised"
        super().__init__(self.cause)
