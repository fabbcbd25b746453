from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Dict

from weatherdash.domain.errors import WeatherLookupError
from weatherdash.domain.lookup import (
    ByCoordinates,
    ByName,
    LookupRequest,
    WeatherBundle,
    parse_coordinates,
    parse_name,
)
from weatherdash.providers.weather.base import WeatherProvider

logger = logging.getLogger(__name__)


class WeatherGateway:
    """Validates lookups and joins the current + forecast upstream calls.

    Both calls run concurrently; the lookup succeeds only when both do. A
    failing call does not cancel its sibling, whose result is discarded.
    """

    def __init__(self, provider: WeatherProvider) -> None:
        self.provider = provider

    async def lookup_by_name(self, name: Any) -> WeatherBundle:
        return await self.lookup(parse_name(name))

    async def lookup_by_coordinates(self, lat: Any, lon: Any) -> WeatherBundle:
        return await self.lookup(parse_coordinates(lat, lon))

    async def lookup(self, request: LookupRequest) -> WeatherBundle:
        if isinstance(request, ByName):
            logger.info("Weather request for city: %s", request.name)
            return await self._fetch_pair(
                self.provider.current_by_name(request.name),
                self.provider.forecast_by_name(request.name),
                label=request.name,
            )
        if isinstance(request, ByCoordinates):
            logger.info("Weather request for coordinates: lat=%s lon=%s", request.lat, request.lon)
            return await self._fetch_pair(
                self.provider.current_by_coordinates(request.lat, request.lon),
                self.provider.forecast_by_coordinates(request.lat, request.lon),
                label=f"{request.lat},{request.lon}",
            )
        raise TypeError(f"Unsupported lookup request: {request!r}")

    async def _fetch_pair(
        self,
        current_call: Awaitable[Dict[str, Any]],
        forecast_call: Awaitable[Dict[str, Any]],
        *,
        label: str,
    ) -> WeatherBundle:
        try:
            current, forecast = await asyncio.gather(current_call, forecast_call)
        except WeatherLookupError as exc:
            logger.warning("Weather lookup for %s failed (%s): %s", label, exc.kind.value, exc)
            raise
        logger.info("Fetched weather data for: %s", current.get("name"))
        return WeatherBundle(current=current, forecast=forecast)
