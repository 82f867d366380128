from __future__ import annotations

from collections.abc import Iterable

from ..vendors import store
from ..vendors.models import Review


def average_rating(ratings: Iterable[int]) -> float | None:
    """Mean of ``ratings``, or ``None`` when there are none."""
    values = list(ratings)
    if not values:
        return None
    return round(sum(values) / len(values), 2)


def rating_summary(vendor_id: str) -> tuple[float | None, int]:
    reviews = store.list_reviews(vendor_id)
    return average_rating(r.rating for r in reviews), len(reviews)


class LiveRating:
    """
    Keeps a vendor's average rating current while open.

    Subscribes to the vendor's reviews on ``__enter__`` (or ``open()``) and
    recomputes on every insert; ``__exit__`` (or ``close()``) releases the
    subscription.
    """

    def __init__(self, vendor_id: str) -> None:
        self.vendor_id = vendor_id
        self.average: float | None = None
        self.count = 0
        self.updates = 0
        self._subscription: store.Subscription | None = None

    def _on_reviews(self, reviews: list[Review]) -> None:
        self.average = average_rating(r.rating for r in reviews)
        self.count = len(reviews)
        self.updates += 1

    def open(self) -> LiveRating:
        if self._subscription is None:
            with store.lock:
                self._subscription = store.subscribe_reviews(self.vendor_id, self._on_reviews)
                self.average, self.count = rating_summary(self.vendor_id)
        return self

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None

    def __enter__(self) -> LiveRating:
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()
