from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

import typer
import uvicorn

from weatherdash.api.main import create_app
from weatherdash.config import ConfigError, Settings, history_database_url, load_settings
from weatherdash.domain.errors import ValidationError, WeatherLookupError, translate_error
from weatherdash.domain.forecast import current_summary, forecast_cards
from weatherdash.domain.lookup import WeatherBundle
from weatherdash.infra.database import get_engine
from weatherdash.infra.db.blob_repository import BlobRepository
from weatherdash.logging_config import configure_logging
from weatherdash.providers.weather.base import WeatherProvider
from weatherdash.providers.weather.openweathermap import OpenWeatherMapProvider
from weatherdash.services.gateway import WeatherGateway
from weatherdash.services.history import HistoryStore

logger = logging.getLogger(__name__)

app = typer.Typer(help="Weather dashboard: API server and terminal client")
history_app = typer.Typer(help="Manage the local search history")
app.add_typer(history_app, name="history")


def build_provider(settings: Settings) -> WeatherProvider:
    return OpenWeatherMapProvider(
        settings.api_key,
        base_url=settings.base_url,
        units=settings.units,
        timeout=settings.request_timeout,
    )


def build_history_store() -> HistoryStore:
    return HistoryStore(BlobRepository(get_engine(history_database_url())))


@app.command("serve")
def cli_serve(
    host: Optional[str] = typer.Option(None, help="Bind address (defaults to HOST)"),
    port: Optional[int] = typer.Option(None, help="Port (defaults to PORT or 3000)"),
):
    settings = _settings_or_exit()
    configure_logging(settings.log_level)
    api = create_app(settings)
    bind_host = host or settings.host
    bind_port = port or settings.port
    logger.info("Weather dashboard server running on http://localhost:%s", bind_port)
    uvicorn.run(api, host=bind_host, port=bind_port)


@app.command("weather")
def cli_weather(city: str = typer.Argument(..., help="Place name to look up")):
    settings = _settings_or_exit()
    configure_logging(settings.log_level)
    try:
        bundle = _run_lookup(settings, lambda gateway: gateway.lookup_by_name(city))
    except WeatherLookupError as exc:
        message = str(exc) if isinstance(exc, ValidationError) else translate_error(exc).value
        typer.echo(message, err=True)
        raise typer.Exit(code=1)
    _render(bundle)
    _record(bundle)


@app.command("here")
def cli_here(
    lat: float = typer.Option(..., help="Latitude -90..90"),
    lon: float = typer.Option(..., help="Longitude -180..180"),
):
    """Look up weather at a coordinate pair. Failures are logged, not shown."""
    settings = _settings_or_exit()
    configure_logging(settings.log_level)
    try:
        bundle = _run_lookup(settings, lambda gateway: gateway.lookup_by_coordinates(lat, lon))
        _render(bundle)
        _record(bundle)
    except Exception:
        logger.warning("Coordinate weather lookup failed", exc_info=True)


@history_app.command("list")
def cli_history_list():
    entries = build_history_store().list()
    if not entries:
        typer.echo("No search history yet")
        return
    for entry in entries:
        typer.echo(entry)


@history_app.command("add")
def cli_history_add(name: str = typer.Argument(..., help="Place name")):
    try:
        build_history_store().add(name)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(f'City "{name}" added to history')


@history_app.command("remove")
def cli_history_remove(name: str = typer.Argument(..., help="Place name")):
    build_history_store().remove(name)
    typer.echo(f'City "{name}" deleted successfully')


def _settings_or_exit() -> Settings:
    try:
        return load_settings()
    except ConfigError as exc:
        typer.echo(f"FATAL: {exc}", err=True)
        raise typer.Exit(code=1)


def _run_lookup(settings: Settings, call: Callable[[WeatherGateway], Awaitable[WeatherBundle]]) -> WeatherBundle:
    async def runner() -> WeatherBundle:
        provider = build_provider(settings)
        try:
            return await call(WeatherGateway(provider))
        finally:
            await provider.aclose()

    return asyncio.run(runner())


def _render(bundle: WeatherBundle) -> None:
    summary = current_summary(bundle.current)
    typer.echo(f"{summary.name} ({summary.observed_on.isoformat()})")
    typer.echo(f"Temperature: {_show(summary.temperature)}°C")
    typer.echo(f"Humidity: {_show(summary.humidity)}%")
    typer.echo(f"Wind speed: {_show(summary.wind_speed)}")
    typer.echo("")
    typer.echo("Forecast:")
    for card in forecast_cards(bundle.forecast):
        day = card.day.isoformat() if card.day else "-"
        typer.echo(
            f"{day}\tTemp: {_show(card.temperature)}°C\tHumidity: {_show(card.humidity)}%\t{card.description}"
        )


def _record(bundle: WeatherBundle) -> None:
    name = bundle.current.get("name")
    if name:
        build_history_store().add(name)


def _show(value) -> str:
    return "-" if value is None else str(value)


if __name__ == "__main__":
    app()
