from __future__ import annotations

from rapidfuzz import fuzz, utils

from ..vendors.models import Vendor
from .config import DEFAULT_SEARCH_CONFIG, SearchConfig


def _searchable_fields(vendor: Vendor) -> list[str]:
    fields = [vendor.name, vendor.description, vendor.cuisine]
    fields.extend(d.name for d in vendor.dishes)
    return [f for f in fields if f]


def field_similarity(query: str, text: str) -> float:
    """
    Return a 0..1 similarity for ``text`` approximately containing ``query``.

    The query is aligned inside the field. A query longer than the field
    cannot be contained in it, so it is compared whole against the field.
    """
    query, text = utils.default_process(query), utils.default_process(text)
    if len(query) <= len(text):
        return fuzz.partial_ratio(query, text) / 100.0
    return fuzz.ratio(query, text) / 100.0


def score_vendor(query: str, vendor: Vendor) -> float:
    """Best similarity of ``query`` over the vendor's searchable fields."""
    scores = [field_similarity(query, text) for text in _searchable_fields(vendor)]
    return max(scores, default=0.0)


def match_vendors(
    query: str,
    vendors: list[Vendor],
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> list[tuple[Vendor, float | None]]:
    """
    Fuzzy-match ``query`` against vendors and rank by best-field score.

    An empty query returns every vendor in input order with no score.
    Ties keep their input order.
    """
    if not query or not query.strip():
        return [(v, None) for v in vendors]

    scored: list[tuple[Vendor, float]] = []
    for vendor in vendors:
        score = score_vendor(query, vendor)
        if score >= config.min_similarity:
            scored.append((vendor, round(score, 4)))

    scored.sort(key=lambda item: item[1], reverse=True)
    return scored
