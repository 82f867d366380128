"""Client utilities for the Nominatim search API."""
from __future__ import annotations

import logging
from typing import Any

import requests

from ..vendors.models import Coordinate
from .config import DEFAULT_PLACES_CONFIG, PlacesConfig

logger = logging.getLogger(__name__)
_SESSION = requests.Session()


class PlaceLookupError(RuntimeError):
    """Raised when the place search API fails or returns an unexpected payload."""


def _search(query: str, limit: int, config: PlacesConfig) -> list[dict[str, Any]]:
    params = {"q": query, "format": "json", "limit": limit}
    headers = {"User-Agent": config.user_agent}
    try:
        response = _SESSION.get(
            f"{config.base_url}/search",
            params=params,
            headers=headers,
            timeout=config.timeout,
        )
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Place search failed for %r", query, exc_info=True)
        raise PlaceLookupError(str(exc)) from exc
    if not isinstance(payload, list):
        logger.error("Place search returned %s instead of a list", type(payload).__name__)
        raise PlaceLookupError("unexpected payload")
    return payload


def suggest_places(query: str, config: PlacesConfig = DEFAULT_PLACES_CONFIG) -> list[str]:
    if not query or not query.strip():
        return []
    results = _search(query.strip(), config.suggestion_limit, config)
    return [r["display_name"] for r in results if r.get("display_name")]


def geocode(query: str, config: PlacesConfig = DEFAULT_PLACES_CONFIG) -> Coordinate | None:
    """Return the best coordinate for ``query``, or ``None`` if nothing matched."""
    if not query or not query.strip():
        return None
    results = _search(query.strip(), 1, config)
    if not results:
        return None
    try:
        return Coordinate(latitude=float(results[0]["lat"]), longitude=float(results[0]["lon"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise PlaceLookupError(f"malformed coordinate in result: {exc}") from exc
