from __future__ import annotations

import logging
import time

from ..analytics.store import record_event
from ..places.client import PlaceLookupError, geocode
from ..rewards.ratings import rating_summary
from ..vendors.models import (
    Coordinate,
    RankedVendor,
    SearchMode,
    SearchResponse,
    Vendor,
)
from ..vendors.store import list_vendors
from .config import DEFAULT_SEARCH_CONFIG, SearchConfig
from .distance import (
    distance_label,
    distance_to,
    filter_within_radius,
    is_coordinate_query,
    parse_coordinate_query,
)
from .filters import filter_approved
from .matcher import match_vendors

logger = logging.getLogger(__name__)


def _ranked(
    vendor: Vendor,
    score: float | None,
    distance_km: float | None,
) -> RankedVendor:
    avg, count = rating_summary(vendor.id)
    return RankedVendor(
        vendor=vendor,
        score=score,
        average_rating=avg,
        review_count=count,
        distance_km=distance_km,
        distance_label=distance_label(distance_km),
    )


def resolve_place(place: str) -> Coordinate | None:
    """
    Coordinate for a ``place`` query: parsed directly, else geocoded.

    Coordinate-shaped text is never geocoded; out-of-range values resolve
    to no location.
    """
    if is_coordinate_query(place):
        coord = parse_coordinate_query(place)
        if coord is None:
            logger.warning("Coordinate query %r is out of range; returning no results", place)
        return coord
    try:
        return geocode(place)
    except PlaceLookupError:
        logger.warning("Could not geocode place %r; returning no results", place)
        return None


def search_by_dish(
    query: str,
    user_location: Coordinate | None = None,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> SearchResponse:
    candidates = filter_approved(list_vendors())
    matches = match_vendors(query, candidates, config)
    results = [
        _ranked(v, score, distance_to(user_location, v, config))
        for v, score in matches
    ]
    mode = SearchMode.dish if query.strip() else SearchMode.all
    return SearchResponse(
        mode=mode,
        query=query,
        user_location=user_location,
        results=results,
        total_candidates=len(candidates),
    )


def search_by_location(
    user_location: Coordinate | None,
    query: str = "",
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> SearchResponse:
    candidates = filter_approved(list_vendors())
    if user_location is None:
        nearby: list[tuple[Vendor, float]] = []
    else:
        nearby = filter_within_radius(user_location, candidates, config)
    results = [_ranked(v, None, round(d, 1)) for v, d in nearby]
    return SearchResponse(
        mode=SearchMode.place,
        query=query,
        user_location=user_location,
        results=results,
        total_candidates=len(candidates),
    )


def run_search(
    dish: str | None = None,
    place: str | None = None,
    nearby: bool = False,
    lat: float | None = None,
    lng: float | None = None,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> SearchResponse:
    """
    Dispatch a results-page query to the matching search mode.

    ``place`` or ``nearby`` selects location mode, otherwise ``dish`` (possibly
    empty) selects text mode. Nearby searches without a device location use
    the configured default coordinate.
    """
    start_time = time.time()

    device_location = None
    if lat is not None and lng is not None:
        device_location = Coordinate(latitude=lat, longitude=lng)

    if place and place.strip():
        response = search_by_location(resolve_place(place), query=place, config=config)
    elif nearby:
        if device_location is None:
            device_location = Coordinate(
                latitude=config.default_latitude,
                longitude=config.default_longitude,
            )
        response = search_by_location(device_location, config=config)
    else:
        response = search_by_dish(dish or "", device_location, config)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("search", {
        "mode": response.mode.value,
        "query": response.query,
        "total_candidates": response.total_candidates,
        "results_returned": len(response.results),
        "response_time_ms": elapsed_ms,
    })
    return response


def list_public_vendors(
    user_location: Coordinate | None = None,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> list[RankedVendor]:
    return [
        _ranked(v, None, distance_to(user_location, v, config))
        for v in filter_approved(list_vendors())
    ]
