from __future__ import annotations

from fastapi import HTTPException, Request

from weatherdash.services.gateway import WeatherGateway


def get_gateway(request: Request) -> WeatherGateway:
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        raise HTTPException(status_code=500, detail="Weather gateway not configured")
    return gateway
