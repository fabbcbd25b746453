"""Pydantic schemas for the weather endpoints."""
from typing import Any, Dict

from pydantic import BaseModel


class WeatherResponse(BaseModel):
    """Upstream payloads passed through unchanged."""

    currentWeather: Dict[str, Any]
    forecast: Dict[str, Any]


class ErrorResponse(BaseModel):
    """User-readable failure message."""

    error: str
