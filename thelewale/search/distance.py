from __future__ import annotations

import re

import numpy as np

from ..vendors.models import Coordinate, Vendor
from .config import DEFAULT_SEARCH_CONFIG, SearchConfig

LOCATION_UNAVAILABLE = "Location unavailable"

_COORD_QUERY_RE = re.compile(
    r"^\s*lat\s*:\s*(-?\d+(?:\.\d+)?)\s*,\s*lng\s*:\s*(-?\d+(?:\.\d+)?)\s*$",
    re.IGNORECASE,
)


def _haversine(
    lat1: np.ndarray | float,
    lng1: np.ndarray | float,
    lat2: np.ndarray | float,
    lng2: np.ndarray | float,
    earth_radius_km: float,
) -> np.ndarray:
    lat1, lng1, lat2, lng2 = (np.radians(x) for x in (lat1, lng1, lat2, lng2))
    dlat = lat2 - lat1
    dlng = lng2 - lng1
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlng / 2) ** 2
    return 2 * earth_radius_km * np.arcsin(np.sqrt(np.clip(a, 0.0, 1.0)))


def haversine_km(
    a: Coordinate,
    b: Coordinate,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> float:
    """Great-circle distance between two coordinates in kilometres."""
    return float(
        _haversine(a.latitude, a.longitude, b.latitude, b.longitude, config.earth_radius_km)
    )


def distance_to(
    user_location: Coordinate | None,
    vendor: Vendor,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> float | None:
    """Distance for display, or ``None`` when either coordinate is unknown."""
    if user_location is None or vendor.location is None:
        return None
    return round(haversine_km(user_location, vendor.location, config), 1)


def distance_label(distance_km: float | None) -> str:
    if distance_km is None:
        return LOCATION_UNAVAILABLE
    return f"{distance_km:.1f} km"


def filter_within_radius(
    user_location: Coordinate,
    vendors: list[Vendor],
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> list[tuple[Vendor, float]]:
    """
    Keep vendors within ``config.radius_km`` of ``user_location``.

    Vendors without a stored coordinate are excluded. Results are ordered
    nearest first and carry the unrounded distance.
    """
    located = [v for v in vendors if v.location is not None]
    if not located:
        return []

    lats = np.array([v.location.latitude for v in located])
    lngs = np.array([v.location.longitude for v in located])
    distances = _haversine(
        user_location.latitude,
        user_location.longitude,
        lats,
        lngs,
        config.earth_radius_km,
    )

    order = np.argsort(distances, kind="stable")
    return [
        (located[i], float(distances[i]))
        for i in order
        if distances[i] <= config.radius_km
    ]


def parse_coordinate_query(text: str | None) -> Coordinate | None:
    """Parse ``"Lat: <lat>, Lng: <lng>"``; anything else returns ``None``."""
    if not text:
        return None
    match = _COORD_QUERY_RE.match(text)
    if not match:
        return None
    lat, lng = float(match.group(1)), float(match.group(2))
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        return None
    return Coordinate(latitude=lat, longitude=lng)


def is_coordinate_query(text: str | None) -> bool:
    """Whether ``text`` has the ``"Lat: <lat>, Lng: <lng>"`` shape, in range or not."""
    return bool(text) and _COORD_QUERY_RE.match(text) is not None
