from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from weatherdash.api.routers import weather
from weatherdash.config import Settings, load_settings
from weatherdash.providers.weather.openweathermap import OpenWeatherMapProvider
from weatherdash.services.gateway import WeatherGateway

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, gateway: Optional[WeatherGateway] = None) -> FastAPI:
    """Build the API. Raises ``ConfigError`` when no settings are given and the
    environment lacks ``API_KEY``, so nothing is served without a credential."""
    settings = settings or load_settings()
    provider = None
    if gateway is None:
        provider = OpenWeatherMapProvider(
            settings.api_key,
            base_url=settings.base_url,
            units=settings.units,
            timeout=settings.request_timeout,
        )
        gateway = WeatherGateway(provider)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if provider is not None:
            await provider.aclose()

    app = FastAPI(title="Weather Dashboard API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.gateway = gateway

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(weather.router, prefix="/api")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    if settings.public_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(settings.public_dir), html=True), name="public")
    else:
        logger.info("Static directory %s not found; serving API only", settings.public_dir)
    return app
