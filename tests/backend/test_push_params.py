"""Tests for station push parameter decoding."""

import pytest

from stormcast.errors import ParseError, SerializeError
from stormcast.protocol.push_params import (
    normalize_params,
    parse_query_string,
    parse_reading,
)
from stormcast.schemas.reading import STATION_KEYS, Reading

SENSOR_FIELDS = [name for name in Reading.model_fields if name != "unrecognized"]


class TestTolerantDecoding:
    def test_partial_data(self):
        reading = parse_query_string("tempf=72.5&humidity=45")
        assert reading.tempf == 72.5
        assert reading.humidity == 45
        assert reading.windspeedmph is None
        for field in SENSOR_FIELDS:
            if field not in ("tempf", "humidity"):
                assert getattr(reading, field) is None, field

    def test_empty_query_string(self):
        reading = parse_query_string("")
        assert all(getattr(reading, f) is None for f in SENSOR_FIELDS)
        assert reading.unrecognized == {}

    def test_empty_mapping(self):
        assert parse_reading({}).present_fields() == {}

    def test_unrecognized_keys_are_kept_aside(self):
        reading = parse_reading({
            "tempf": "70.1",
            "PASSKEY": "ABCDEF",
            "stationtype": "AMBWeatherV4.2.9",
            "dateutc": "2024-05-01 12:00:00",
        })
        assert reading.tempf == 70.1
        assert reading.unrecognized == {
            "PASSKEY": "ABCDEF",
            "stationtype": "AMBWeatherV4.2.9",
            "dateutc": "2024-05-01 12:00:00",
        }

    def test_unrecognized_garbage_does_not_fail(self):
        reading = parse_reading({"lightning_time": "not-a-time", "pm25": "??"})
        assert reading.present_fields() == {}
        assert set(reading.unrecognized) == {"lightning_time", "pm25"}

    def test_blank_value_means_absent(self):
        reading = parse_query_string("tempf=&humidity=45")
        assert reading.tempf is None
        assert reading.humidity == 45

    def test_negative_temperature(self):
        assert parse_reading({"tempf": "-12.4"}).tempf == -12.4

    def test_out_of_plausible_range_is_stored(self):
        reading = parse_reading({"humidity": "120", "winddir": "400", "dailyrainin": "-0.5"})
        assert reading.humidity == 120
        assert reading.winddir == 400
        assert reading.dailyrainin == -0.5

    def test_all_fields(self):
        params = {
            "tempf": "72.5", "humidity": "45", "windspeedmph": "5.5",
            "windgustmph": "8.2", "maxdailygust": "15.7", "winddir": "180",
            "winddir_avg10m": "175", "uv": "5", "solarradiation": "456.78",
            "hourlyrainin": "0.01", "eventrainin": "0.5", "dailyrainin": "0.123",
            "weeklyrainin": "1.234", "monthlyrainin": "3.456", "yearlyrainin": "12.345",
            "tempinf": "68.2", "humidityin": "40", "baromrelin": "29.921",
            "baromabsin": "29.5", "battout": "1", "battin": "0",
        }
        reading = parse_reading(params)
        assert set(reading.present_fields()) == set(SENSOR_FIELDS)
        assert reading.winddir_avg10m == 175
        assert reading.battin == 0


class TestAliases:
    def test_wunderground_names(self):
        reading = parse_reading({
            "indoortempf": "68.0",
            "indoorhumidity": "41",
            "baromin": "30.01",
            "absbaromin": "29.80",
            "rainin": "0.02",
        })
        assert reading.tempinf == 68.0
        assert reading.humidityin == 41
        assert reading.baromrelin == 30.01
        assert reading.baromabsin == 29.80
        assert reading.hourlyrainin == 0.02
        assert reading.unrecognized == {}

    def test_canonical_key_wins(self):
        reading = parse_reading({"tempinf": "70.0", "indoortempf": "60.0"})
        assert reading.tempinf == 70.0

    def test_station_keys_cover_every_field(self):
        assert set(STATION_KEYS.values()) == set(SENSOR_FIELDS)
        assert STATION_KEYS["baromin"] == "baromrelin"


class TestParseErrors:
    def test_non_numeric_float(self):
        with pytest.raises(ParseError) as exc_info:
            parse_query_string("tempf=notanumber")
        assert exc_info.value.field == "tempf"
        assert exc_info.value.value == "notanumber"
        assert "tempf" in str(exc_info.value)

    def test_non_numeric_integer(self):
        with pytest.raises(ParseError) as exc_info:
            parse_reading({"humidity": "high"})
        assert exc_info.value.field == "humidity"

    def test_negative_integer_rejected(self):
        with pytest.raises(ParseError) as exc_info:
            parse_reading({"winddir": "-1"})
        assert exc_info.value.field == "winddir"

    def test_decimal_text_rejected_for_integer(self):
        with pytest.raises(ParseError) as exc_info:
            parse_reading({"humidity": "45.0"})
        assert exc_info.value.field == "humidity"
        assert exc_info.value.value == "45.0"

    def test_integer_out_of_storage_range(self):
        with pytest.raises(ParseError):
            parse_reading({"uv": "256"})

    def test_error_names_alias_used(self):
        with pytest.raises(ParseError) as exc_info:
            parse_reading({"baromin": "x"})
        assert exc_info.value.field == "baromin"
        assert exc_info.value.value == "x"


class TestNormalizeParams:
    def test_repeated_values_last_wins(self):
        assert normalize_params({"tempf": ["70.0", "71.0"]}) == {"tempf": "71.0"}

    def test_bytes_decoded(self):
        assert normalize_params({b"tempf": b"70.0"}) == {"tempf": "70.0"}

    def test_empty_list_is_blank(self):
        assert parse_reading({"tempf": []}).tempf is None

    def test_non_text_value_rejected(self):
        with pytest.raises(SerializeError):
            normalize_params({"tempf": 70.0})

    def test_non_text_key_rejected(self):
        with pytest.raises(SerializeError):
            normalize_params({7: "70.0"})

    def test_invalid_utf8_rejected(self):
        with pytest.raises(SerializeError):
            normalize_params({"tempf": b"\xff\xfe"})
