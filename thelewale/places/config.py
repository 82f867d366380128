from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class PlacesConfig:
    base_url: str = os.getenv("PLACES_API_URL", "https://nominatim.openstreetmap.org")
    # Nominatim rejects requests without an identifying User-Agent.
    user_agent: str = os.getenv("PLACES_USER_AGENT", "thelewale/1.0")
    timeout: float = 10.0
    suggestion_limit: int = 5


DEFAULT_PLACES_CONFIG = PlacesConfig()
