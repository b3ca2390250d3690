"""Decoder for station push requests (URL query parameters).

Stations report by issuing a GET with every sensor value as a query
parameter. Firmware differs between vendors and versions, so the decoder
is deliberately tolerant:

- keys it does not know are kept aside in Reading.unrecognized
- missing keys and blank values leave the field absent
- only a known key with an unparseable value is an error
"""

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl

from pydantic import ValidationError

from ..errors import ParseError, SerializeError
from ..schemas.reading import STATION_KEYS, Reading

logger = logging.getLogger(__name__)


def _as_text(key: Any, value: Any) -> str:
    """Coerce one raw parameter value to text."""
    if isinstance(value, (list, tuple)):
        # Repeated parameter: the last occurrence wins
        if not value:
            return ""
        value = value[-1]
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SerializeError(key, f"value is not valid UTF-8: {exc}") from exc
    if not isinstance(value, str):
        raise SerializeError(key, f"unsupported value type {type(value).__name__}")
    return value


def normalize_params(params: Mapping[Any, Any]) -> dict[str, str]:
    """Flatten a raw parameter mapping into a plain str -> str dict.

    Accepts what transports typically hand over: single strings, bytes,
    or lists of values (as produced by urllib.parse.parse_qs).
    """
    normalized: dict[str, str] = {}
    for key, value in params.items():
        if isinstance(key, bytes):
            try:
                key = key.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise SerializeError(key, f"key is not valid UTF-8: {exc}") from exc
        if not isinstance(key, str):
            raise SerializeError(key, f"unsupported key type {type(key).__name__}")
        normalized[key] = _as_text(key, value)
    return normalized


def parse_reading(params: Mapping[Any, Any]) -> Reading:
    """Decode a raw parameter mapping into a Reading.

    Raises:
        SerializeError: the mapping holds non-text keys or values.
        ParseError: a known key carries a value of the wrong type.
    """
    known: dict[str, str] = {}
    unrecognized: dict[str, str] = {}
    for key, value in normalize_params(params).items():
        if key not in STATION_KEYS:
            unrecognized[key] = value
        elif value.strip():
            known[key] = value

    if unrecognized:
        logger.debug("Ignoring unrecognized keys: %s", ", ".join(sorted(unrecognized)))

    try:
        return Reading.model_validate({**known, "unrecognized": unrecognized})
    except ValidationError as exc:
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else "unknown"
        raw = known.get(field, str(error.get("input", "")))
        raise ParseError(field, raw, error["msg"]) from exc


def parse_query_string(query: str) -> Reading:
    """Decode a raw URL query string, e.g. ``tempf=72.5&humidity=45``."""
    return parse_reading(dict(parse_qsl(query, keep_blank_values=True)))
