"""Pydantic schema for one weather-station sample.

Field names follow the query parameter format used by Ambient Weather and
Ecowitt consoles. A handful of Weather Underground PWS parameter names are
accepted as aliases where they carry the same quantity in the same unit.
"""

from typing import Annotated, Optional

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field


def _digits_only(value):
    """Reject text like "45.0" or "-1" that lax int parsing would coerce."""
    if isinstance(value, str):
        text = value.strip()
        if not (text.isascii() and text.isdigit()):
            raise ValueError("expected a non-negative integer")
    return value


UInt8 = Annotated[int, BeforeValidator(_digits_only), Field(ge=0, le=255)]
UInt16 = Annotated[int, BeforeValidator(_digits_only), Field(ge=0, le=65535)]


def _aliased(*keys: str):
    return Field(default=None, validation_alias=AliasChoices(*keys))


class Reading(BaseModel):
    """A decoded station sample; every field is independently optional.

    None means the station did not report the value, never zero.
    """

    model_config = ConfigDict(frozen=True)

    # outdoor sensors
    tempf: Optional[float] = None                # outdoor temperature (F)
    humidity: Optional[UInt8] = None             # outdoor humidity (0-100%)
    windspeedmph: Optional[float] = None
    windgustmph: Optional[float] = None
    maxdailygust: Optional[float] = None         # max gust today (mph)
    winddir: Optional[UInt16] = None             # degrees, 0-359
    winddir_avg10m: Optional[UInt16] = None
    uv: Optional[UInt8] = None                   # UV index
    solarradiation: Optional[float] = None       # W/m^2

    # rainfall totals (inches)
    hourlyrainin: Optional[float] = _aliased("hourlyrainin", "rainin")
    eventrainin: Optional[float] = None
    dailyrainin: Optional[float] = None
    weeklyrainin: Optional[float] = None
    monthlyrainin: Optional[float] = None
    yearlyrainin: Optional[float] = None

    # indoor sensors
    tempinf: Optional[float] = _aliased("tempinf", "indoortempf")
    humidityin: Optional[UInt8] = _aliased("humidityin", "indoorhumidity")
    baromrelin: Optional[float] = _aliased("baromrelin", "baromin")   # inHg
    baromabsin: Optional[float] = _aliased("baromabsin", "absbaromin")

    # battery status (0=low, 1=ok)
    battout: Optional[UInt8] = None
    battin: Optional[UInt8] = None

    # vendor extensions and identity parameters; diagnostics only
    unrecognized: dict[str, str] = Field(default_factory=dict)

    def present_fields(self) -> dict[str, float]:
        """Return the reported sensor fields, skipping absent ones."""
        return {
            name: value
            for name, value in self
            if name != "unrecognized" and value is not None
        }


def _station_keys() -> dict[str, str]:
    """Map every accepted query key (canonical or alias) to its field name."""
    keys: dict[str, str] = {}
    for name, info in Reading.model_fields.items():
        if name == "unrecognized":
            continue
        alias = info.validation_alias
        choices = alias.choices if isinstance(alias, AliasChoices) else [name]
        for choice in choices:
            keys[str(choice)] = name
    return keys


STATION_KEYS = _station_keys()
