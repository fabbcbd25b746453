from __future__ import annotations

import pytest

from weatherdash.domain.errors import ErrorKind, ValidationError
from weatherdash.domain.lookup import (
    MAX_NAME_LENGTH,
    ByCoordinates,
    ByName,
    WeatherBundle,
    parse_coordinates,
    parse_name,
)


def test_parse_name_trims_input():
    assert parse_name("  London  ") == ByName(name="London")


@pytest.mark.parametrize("raw", ["", "   ", "\t\n", None])
def test_parse_name_rejects_blank(raw):
    with pytest.raises(ValidationError) as excinfo:
        parse_name(raw)
    assert excinfo.value.kind is ErrorKind.VALIDATION
    assert "required" in str(excinfo.value)


def test_parse_name_length_limit_applies_after_trim():
    assert parse_name(" " + "a" * MAX_NAME_LENGTH + " ").name == "a" * MAX_NAME_LENGTH
    with pytest.raises(ValidationError, match="too long"):
        parse_name("a" * (MAX_NAME_LENGTH + 1))


def test_parse_coordinates_accepts_strings_and_numbers():
    assert parse_coordinates("51.5", "-0.12") == ByCoordinates(lat=51.5, lon=-0.12)
    assert parse_coordinates(-90, 180) == ByCoordinates(lat=-90.0, lon=180.0)


@pytest.mark.parametrize("lat, lon", [(None, "10"), ("10", None), ("", "10"), ("10", "  ")])
def test_parse_coordinates_requires_both(lat, lon):
    with pytest.raises(ValidationError, match="required"):
        parse_coordinates(lat, lon)


@pytest.mark.parametrize(
    "lat, lon",
    [(200, 10), (-90.01, 0), (0, 180.5), (0, -181), ("abc", "10"), ("nan", "0"), (True, 0)],
)
def test_parse_coordinates_rejects_invalid_values(lat, lon):
    with pytest.raises(ValidationError, match="Invalid coordinates"):
        parse_coordinates(lat, lon)


def test_bundle_payload_uses_wire_names():
    bundle = WeatherBundle(current={"name": "X"}, forecast={"list": []})
    assert bundle.to_payload() == {"currentWeather": {"name": "X"}, "forecast": {"list": []}}


def test_bundle_payloads_are_read_only():
    upstream = {"name": "X", "main": {"temp": 1}}
    bundle = WeatherBundle(current=upstream, forecast={"list": []})

    with pytest.raises(TypeError):
        bundle.current["name"] = "Y"
    with pytest.raises(TypeError):
        del bundle.forecast["list"]

    upstream["name"] = "changed"
    assert bundle.current["name"] == "X"

    payload = bundle.to_payload()
    assert type(payload["currentWeather"]) is dict
    payload["currentWeather"]["name"] = "Z"
    assert bundle.current["name"] == "X"
