from __future__ import annotations

import asyncio

import httpx
import pytest

from weatherdash.domain.errors import NetworkError, UpstreamError, UpstreamTimeout
from weatherdash.providers.weather.openweathermap import OpenWeatherMapProvider
from weatherdash.tests.fakes import CURRENT_LONDON, FORECAST_LONDON


def _provider(handler) -> OpenWeatherMapProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OpenWeatherMapProvider("secret", client=client, base_url="https://owm.test/data/2.5")


def _call(provider: OpenWeatherMapProvider, method: str, *args):
    async def runner():
        try:
            return await getattr(provider, method)(*args)
        finally:
            await provider.client.aclose()

    return asyncio.run(runner())


def test_current_by_name_builds_query():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=CURRENT_LONDON)

    data = _call(_provider(handler), "current_by_name", "São Paulo")

    assert data == CURRENT_LONDON
    request = seen[0]
    assert request.url.path == "/data/2.5/weather"
    assert request.url.params["q"] == "São Paulo"
    assert request.url.params["appid"] == "secret"
    assert request.url.params["units"] == "metric"
    assert "S%C3%A3o" in str(request.url)


def test_forecast_by_coordinates_uses_raw_numbers():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=FORECAST_LONDON)

    data = _call(_provider(handler), "forecast_by_coordinates", 51.5, -0.12)

    assert data == FORECAST_LONDON
    assert seen[0].url.path == "/data/2.5/forecast"
    assert seen[0].url.params["lat"] == "51.5"
    assert seen[0].url.params["lon"] == "-0.12"


def test_non_2xx_raises_upstream_error_with_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text='{"cod":"404","message":"city not found"}')

    with pytest.raises(UpstreamError) as excinfo:
        _call(_provider(handler), "current_by_name", "Nowhere")

    assert excinfo.value.status_code == 404
    assert "city not found" in excinfo.value.body
    assert excinfo.value.malformed is False


@pytest.mark.parametrize("body", ["<html>oops</html>", "[1, 2, 3]"])
def test_malformed_body_raises_upstream_error(body):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=body)

    with pytest.raises(UpstreamError) as excinfo:
        _call(_provider(handler), "forecast_by_name", "London")

    assert excinfo.value.malformed is True


def test_timeout_raises_upstream_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UpstreamTimeout):
        _call(_provider(handler), "current_by_coordinates", 1.0, 2.0)


def test_connection_failure_raises_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Name or service not known", request=request)

    with pytest.raises(NetworkError):
        _call(_provider(handler), "current_by_name", "London")


def test_corrupt_compressed_body_raises_malformed_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.DecodingError("Error -3 while decompressing data", request=request)

    with pytest.raises(UpstreamError) as excinfo:
        _call(_provider(handler), "current_by_name", "London")

    assert excinfo.value.malformed is True


def test_other_request_errors_raise_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.TooManyRedirects("Exceeded maximum allowed redirects.", request=request)

    with pytest.raises(NetworkError):
        _call(_provider(handler), "forecast_by_coordinates", 1.0, 2.0)


def test_requires_api_key():
    with pytest.raises(ValueError):
        OpenWeatherMapProvider("")


def test_aclose_leaves_injected_client_open():
    async def runner():
        client = httpx.AsyncClient()
        provider = OpenWeatherMapProvider("secret", client=client)
        await provider.aclose()
        closed = client.is_closed
        await client.aclose()
        return closed

    assert asyncio.run(runner()) is False
