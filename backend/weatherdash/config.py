"""Application settings."""
from pathlib import Path
from typing import Mapping, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_HISTORY_DATABASE_URL = "sqlite:///weatherdash_history.db"


class ConfigError(RuntimeError):
    """Raised when the process environment cannot produce valid settings."""


class Settings(BaseSettings):
    """Server settings read from the environment or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    api_key: str = Field(validation_alias="API_KEY")
    port: int = Field(3000, gt=0, lt=65536, validation_alias="PORT")
    host: str = Field("0.0.0.0", validation_alias="HOST")
    base_url: str = Field(DEFAULT_BASE_URL, validation_alias="WEATHER_API_BASE_URL")
    units: str = Field("metric", validation_alias="WEATHER_UNITS")
    request_timeout: float = Field(10.0, gt=0, validation_alias="WEATHER_REQUEST_TIMEOUT")
    public_dir: Path = Field(Path("public"), validation_alias="PUBLIC_DIR")
    history_database_url: str = Field(DEFAULT_HISTORY_DATABASE_URL, validation_alias="HISTORY_DATABASE_URL")
    frontend_origin: str = Field("http://localhost:3000", validation_alias="FRONTEND_ORIGIN")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    @field_validator("api_key")
    @classmethod
    def _require_api_key(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("API_KEY must not be blank")
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


class HistorySettings(BaseSettings):
    """Client-side history location; needs no API credential."""

    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    history_database_url: str = Field(DEFAULT_HISTORY_DATABASE_URL, validation_alias="HISTORY_DATABASE_URL")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings, failing before anything is served.

    With ``environ`` the mapping is the only source; otherwise the process
    environment and ``.env`` in the working directory are read.
    """
    try:
        if environ is None:
            return Settings()
        return Settings.model_validate(_non_empty(environ))
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
        if "API_KEY" in fields:
            raise ConfigError(
                "API_KEY environment variable is required. "
                "Add your OpenWeatherMap API key to the environment or a .env file."
            ) from exc
        raise ConfigError(f"Invalid configuration for {', '.join(fields)}: {exc}") from exc


def history_database_url(environ: Optional[Mapping[str, str]] = None) -> str:
    if environ is None:
        return HistorySettings().history_database_url
    return HistorySettings.model_validate(_non_empty(environ)).history_database_url


def _non_empty(environ: Mapping[str, str]) -> dict:
    return {key: value for key, value in environ.items() if value != ""}
