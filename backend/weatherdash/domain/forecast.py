from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

# The upstream forecast is sampled every 3 hours; 8 samples make one day.
FORECAST_INTERVAL = 8
ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{code}@2x.png"


@dataclass(frozen=True)
class CurrentSummary:
    name: str
    observed_on: date
    temperature: Optional[int]
    humidity: Optional[float]
    wind_speed: Optional[float]


@dataclass(frozen=True)
class ForecastCard:
    day: Optional[date]
    temperature: Optional[int]
    humidity: Optional[float]
    description: str
    icon_url: Optional[str]


def daily_samples(forecast: Mapping[str, Any], interval: int = FORECAST_INTERVAL) -> List[Dict[str, Any]]:
    if interval <= 0:
        raise ValueError("interval must be > 0")
    samples = forecast.get("list") or []
    return list(samples[::interval])


def current_summary(current: Mapping[str, Any], today: Optional[date] = None) -> CurrentSummary:
    main = current.get("main") or {}
    wind = current.get("wind") or {}
    observed_on = today or _epoch_to_date(current.get("dt")) or datetime.now(timezone.utc).date()
    return CurrentSummary(
        name=current.get("name") or "",
        observed_on=observed_on,
        temperature=round_half_up(main.get("temp")),
        humidity=main.get("humidity"),
        wind_speed=wind.get("speed"),
    )


def forecast_cards(forecast: Mapping[str, Any], interval: int = FORECAST_INTERVAL) -> List[ForecastCard]:
    cards: List[ForecastCard] = []
    for sample in daily_samples(forecast, interval):
        main = sample.get("main") or {}
        weather = (sample.get("weather") or [{}])[0]
        code = weather.get("icon")
        cards.append(
            ForecastCard(
                day=_parse_sample_day(sample),
                temperature=round_half_up(main.get("temp")),
                humidity=main.get("humidity"),
                description=weather.get("description") or "",
                icon_url=icon_url(code) if code else None,
            )
        )
    return cards


def icon_url(code: str) -> str:
    return ICON_URL_TEMPLATE.format(code=code)


def round_half_up(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(math.floor(float(value) + 0.5))


def _parse_sample_day(sample: Mapping[str, Any]) -> Optional[date]:
    text = sample.get("dt_txt")
    if text:
        return datetime.fromisoformat(text).date()
    return _epoch_to_date(sample.get("dt"))


def _epoch_to_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc).date()
