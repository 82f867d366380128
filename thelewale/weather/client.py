"""Client for the Open-Meteo current-conditions API."""
from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from .config import DEFAULT_WEATHER_CONFIG, WeatherConfig

logger = logging.getLogger(__name__)
_SESSION = requests.Session()


class WeatherLookupError(RuntimeError):
    """Raised when current weather cannot be fetched or parsed."""


@dataclass(frozen=True)
class WeatherReading:
    temperature_c: float
    humidity_pct: float


def current_weather(
    latitude: float,
    longitude: float,
    config: WeatherConfig = DEFAULT_WEATHER_CONFIG,
) -> WeatherReading:
    if not config.enabled:
        raise WeatherLookupError("weather lookup is disabled")

    params = {
        "latitude": latitude,
        "longitude": longitude,
        "current": "temperature_2m,relative_humidity_2m",
    }
    try:
        response = _SESSION.get(config.base_url, params=params, timeout=config.timeout)
        response.raise_for_status()
        current = response.json().get("current") or {}
        return WeatherReading(
            temperature_c=float(current["temperature_2m"]),
            humidity_pct=float(current["relative_humidity_2m"]),
        )
    except (requests.RequestException, KeyError, TypeError, ValueError) as exc:
        logger.warning("Weather lookup failed for (%s, %s)", latitude, longitude, exc_info=True)
        raise WeatherLookupError(str(exc)) from exc


def suggest_food(reading: WeatherReading, config: WeatherConfig = DEFAULT_WEATHER_CONFIG) -> str:
    if reading.temperature_c >= config.hot_above_c:
        return "It's hot out there. Cool off with kulfi, lassi or a chilled nimbu pani."
    if reading.temperature_c <= config.cold_below_c:
        return "Chilly weather calls for hot chai, steaming momos or a plate of pakoras."
    if reading.humidity_pct >= config.humid_above_pct:
        return "Muggy day? Try a refreshing golgappa round or some fresh fruit chaat."
    return "Perfect weather to explore: grab some chaat or a kathi roll nearby."
