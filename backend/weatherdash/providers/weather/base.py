from __future__ import annotations

from typing import Any, Dict, Protocol


class WeatherProvider(Protocol):
    """Contract for upstream current-conditions and forecast sources.

    Every call returns the decoded JSON object untouched and raises a
    ``WeatherLookupError`` subclass on failure.
    """

    async def current_by_name(self, name: str) -> Dict[str, Any]:
        raise NotImplementedError

    async def forecast_by_name(self, name: str) -> Dict[str, Any]:
        raise NotImplementedError

    async def current_by_coordinates(self, lat: float, lon: float) -> Dict[str, Any]:
        raise NotImplementedError

    async def forecast_by_coordinates(self, lat: float, lon: float) -> Dict[str, Any]:
        raise NotImplementedError

    async def aclose(self) -> None:
        raise NotImplementedError
