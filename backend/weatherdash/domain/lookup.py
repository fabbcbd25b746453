from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from .errors import ValidationError

MAX_NAME_LENGTH = 100
LAT_MIN, LAT_MAX = -90.0, 90.0
LON_MIN, LON_MAX = -180.0, 180.0

INVALID_COORDINATES_MESSAGE = (
    "Invalid coordinates. Latitude must be -90 to 90, longitude must be -180 to 180."
)


@dataclass(frozen=True)
class ByName:
    name: str


@dataclass(frozen=True)
class ByCoordinates:
    lat: float
    lon: float


LookupRequest = Union[ByName, ByCoordinates]


@dataclass(frozen=True)
class WeatherBundle:
    """Current conditions and forecast exactly as the upstream returned them.

    Both payloads are held behind read-only mapping views; nested upstream
    objects are shared, not copied.
    """

    current: Mapping[str, Any]
    forecast: Mapping[str, Any]

    def __post_init__(self):
        object.__setattr__(self, "current", MappingProxyType(dict(self.current)))
        object.__setattr__(self, "forecast", MappingProxyType(dict(self.forecast)))

    def to_payload(self) -> Dict[str, Any]:
        return {"currentWeather": dict(self.current), "forecast": dict(self.forecast)}


def parse_name(raw: Optional[str]) -> ByName:
    name = (raw or "").strip()
    if not name:
        raise ValidationError("City name is required and cannot be empty.")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError("City name is too long.")
    return ByName(name=name)


def parse_coordinates(lat: Any, lon: Any) -> ByCoordinates:
    if _is_blank(lat) or _is_blank(lon):
        raise ValidationError("Latitude and longitude are required.")
    latitude = _to_float(lat)
    longitude = _to_float(lon)
    if latitude is None or longitude is None:
        raise ValidationError(INVALID_COORDINATES_MESSAGE)
    if not (LAT_MIN <= latitude <= LAT_MAX and LON_MIN <= longitude <= LON_MAX):
        raise ValidationError(INVALID_COORDINATES_MESSAGE)
    return ByCoordinates(lat=latitude, lon=longitude)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number
