from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from weatherdash.domain.errors import NetworkError, UpstreamError, UpstreamTimeout

from .base import WeatherProvider

logger = logging.getLogger(__name__)


class OpenWeatherMapProvider(WeatherProvider):
    BASE_URL = "https://api.openweathermap.org/data/2.5"

    def __init__(
        self,
        api_key: str,
        *,
        base_url: Optional[str] = None,
        units: str = "metric",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not api_key:
            raise ValueError("api_key is required for OpenWeatherMapProvider")
        self.api_key = api_key
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.units = units
        self.timeout = timeout
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def current_by_name(self, name: str) -> Dict[str, Any]:
        return await self._get("weather", {"q": name})

    async def forecast_by_name(self, name: str) -> Dict[str, Any]:
        return await self._get("forecast", {"q": name})

    async def current_by_coordinates(self, lat: float, lon: float) -> Dict[str, Any]:
        return await self._get("weather", {"lat": lat, "lon": lon})

    async def forecast_by_coordinates(self, lat: float, lon: float) -> Dict[str, Any]:
        return await self._get("forecast", {"lat": lat, "lon": lon})

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def _get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        query = dict(params)
        query["appid"] = self.api_key
        query["units"] = self.units
        url = f"{self.base_url}/{endpoint}"
        try:
            resp = await self.client.get(url, params=query, timeout=self.timeout)
        except httpx.TimeoutException as exc:
            raise UpstreamTimeout("Request timeout - weather service took too long to respond") from exc
        except httpx.DecodingError as exc:
            raise UpstreamError(
                f"Undecodable response body from weather API: {exc}",
                malformed=True,
            ) from exc
        except httpx.RequestError as exc:
            raise NetworkError(f"Network failure reaching weather service: {exc}") from exc
        if not resp.is_success:
            raise UpstreamError(
                f"Weather API returned status {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            )
        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamError(
                "Invalid JSON response from weather API",
                status_code=resp.status_code,
                body=resp.text,
                malformed=True,
            ) from exc
        if not isinstance(data, dict):
            raise UpstreamError(
                "Invalid JSON response from weather API",
                status_code=resp.status_code,
                body=resp.text,
                malformed=True,
            )
        logger.debug("GET %s -> %s", endpoint, resp.status_code)
        return data
