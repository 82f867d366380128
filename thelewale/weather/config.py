from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class WeatherConfig:
    base_url: str = os.getenv("WEATHER_API_URL", "https://api.open-meteo.com/v1/forecast")
    timeout: float = 10.0
    enabled: bool = os.getenv("WEATHER_ENABLED", "true").lower() in {"1", "true", "yes"}
    hot_above_c: float = 30.0
    cold_below_c: float = 18.0
    humid_above_pct: float = 70.0


DEFAULT_WEATHER_CONFIG = WeatherConfig()
