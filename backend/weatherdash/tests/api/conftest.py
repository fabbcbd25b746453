from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from weatherdash.api.main import create_app
from weatherdash.config import load_settings
from weatherdash.services.gateway import WeatherGateway
from weatherdash.tests.fakes import FakeWeatherProvider


def _build_api_client(tmp_path, provider: FakeWeatherProvider):
    settings = load_settings({"API_KEY": "test-key", "PUBLIC_DIR": str(tmp_path / "missing-public")})
    app = create_app(settings, gateway=WeatherGateway(provider))
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def provider():
    return FakeWeatherProvider()


@pytest.fixture()
def api_client(tmp_path, provider):
    yield from _build_api_client(tmp_path, provider)
