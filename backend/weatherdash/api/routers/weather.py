from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from weatherdash.api.deps import get_gateway
from weatherdash.domain.errors import UserMessage, ValidationError, WeatherLookupError, translate_error
from weatherdash.schemas.weather import ErrorResponse, WeatherResponse
from weatherdash.services.gateway import WeatherGateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["weather"])

_ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


# Declared before the by-name route so "coords" is never read as a city.
@router.get("/weather/coords", response_model=WeatherResponse, responses=_ERROR_RESPONSES)
async def weather_by_coordinates(
    lat: Optional[str] = Query(None, description="Latitude, -90 to 90"),
    lon: Optional[str] = Query(None, description="Longitude, -180 to 180"),
    gateway: WeatherGateway = Depends(get_gateway),
):
    try:
        bundle = await gateway.lookup_by_coordinates(lat, lon)
    except Exception as exc:
        return _error_response(exc, context=f"coordinates lat={lat!r} lon={lon!r}")
    return bundle.to_payload()


@router.get("/weather/{city}", response_model=WeatherResponse, responses=_ERROR_RESPONSES)
async def weather_by_city(
    city: str,
    gateway: WeatherGateway = Depends(get_gateway),
):
    try:
        bundle = await gateway.lookup_by_name(city)
    except Exception as exc:
        return _error_response(exc, context=f"city {city!r}")
    return bundle.to_payload()


def _error_response(exc: Exception, *, context: str) -> JSONResponse:
    if isinstance(exc, ValidationError):
        logger.info("Rejected weather request for %s: %s", context, exc)
        return JSONResponse(status_code=400, content={"error": str(exc)})
    if isinstance(exc, WeatherLookupError):
        logger.error("Error fetching weather data for %s: %s", context, exc)
        message = translate_error(exc)
    else:
        logger.exception("Unexpected failure fetching weather data for %s", context)
        message = UserMessage.UNAVAILABLE
    return JSONResponse(status_code=500, content={"error": message.value})
