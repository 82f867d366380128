from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from .models import Review, ReviewCreate, Vendor, VendorCreate, VendorStatus

logger = logging.getLogger(__name__)

ReviewCallback = Callable[[list[Review]], None]

_vendors: dict[str, Vendor] = {}
_reviews: dict[str, list[Review]] = {}
_subscribers: dict[str, dict[int, ReviewCallback]] = {}
_next_subscription_id = 0

# Guards every structure above. Multi-step writers in ``submissions`` hold it
# across the entity write and the points increment.
lock = threading.RLock()


class VendorNotFound(KeyError):
    """Raised when a vendor id is unknown to the store."""


class Subscription:
    """Handle for a live review subscription. Closing it is idempotent."""

    def __init__(self, vendor_id: str, token: int) -> None:
        self.vendor_id = vendor_id
        self._token = token
        self.closed = False

    def close(self) -> None:
        if self.closed:
            return
        with lock:
            _subscribers.get(self.vendor_id, {}).pop(self._token, None)
            if not _subscribers.get(self.vendor_id):
                _subscribers.pop(self.vendor_id, None)
        self.closed = True

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ── Vendors ──────────────────────────────────────────────────────────────


def add_vendor(data: VendorCreate, added_by: str | None) -> Vendor:
    vendor = Vendor(
        id=uuid.uuid4().hex,
        status=VendorStatus.pending,
        added_by=added_by,
        created_at=_now(),
        **data.model_dump(),
    )
    with lock:
        _vendors[vendor.id] = vendor
    return vendor


def put_vendor(vendor: Vendor) -> Vendor:
    """Insert or replace a fully-formed vendor record."""
    with lock:
        _vendors[vendor.id] = vendor
    return vendor


def remove_vendor(vendor_id: str) -> None:
    with lock:
        _vendors.pop(vendor_id, None)
        _reviews.pop(vendor_id, None)


def get_vendor(vendor_id: str) -> Vendor:
    vendor = _vendors.get(vendor_id)
    if vendor is None:
        raise VendorNotFound(vendor_id)
    return vendor


def list_vendors() -> list[Vendor]:
    """Return every vendor regardless of status, oldest first."""
    with lock:
        return sorted(_vendors.values(), key=lambda v: v.created_at)


def list_vendors_by_status(status: VendorStatus) -> list[Vendor]:
    return [v for v in list_vendors() if v.status == status]


def list_vendors_by_submitter(user_id: str) -> list[Vendor]:
    return [v for v in list_vendors() if v.added_by == user_id]


def set_vendor_status(vendor_id: str, status: VendorStatus | str) -> Vendor:
    try:
        status = VendorStatus(status)
    except ValueError:
        raise ValueError(f"Unknown vendor status: {status!r}") from None
    with lock:
        vendor = get_vendor(vendor_id)
        updated = vendor.model_copy(update={"status": status})
        _vendors[vendor_id] = updated
    logger.info("Vendor %s moved from %s to %s", vendor_id, vendor.status.value, status.value)
    return updated


# ── Reviews ──────────────────────────────────────────────────────────────


def list_reviews(vendor_id: str) -> list[Review]:
    """Reviews for a vendor, newest first."""
    # Append-only, so insertion order is creation order.
    with lock:
        return list(reversed(_reviews.get(vendor_id, [])))


def add_review(vendor_id: str, data: ReviewCreate, author: str) -> Review:
    with lock:
        get_vendor(vendor_id)
        review = Review(
            id=uuid.uuid4().hex,
            vendor_id=vendor_id,
            author=author,
            created_at=_now(),
            **data.model_dump(),
        )
        _reviews.setdefault(vendor_id, []).append(review)
    return review


def remove_review(vendor_id: str, review_id: str) -> None:
    with lock:
        _reviews[vendor_id] = [r for r in _reviews.get(vendor_id, []) if r.id != review_id]


def notify_review_subscribers(vendor_id: str) -> None:
    """Push the current review sequence to every subscriber of ``vendor_id``."""
    with lock:
        callbacks = list(_subscribers.get(vendor_id, {}).values())
    if not callbacks:
        return
    reviews = list_reviews(vendor_id)
    for callback in callbacks:
        try:
            callback(reviews)
        except Exception:
            logger.warning("Review subscriber for vendor %s failed", vendor_id, exc_info=True)


def subscribe_reviews(vendor_id: str, callback: ReviewCallback) -> Subscription:
    """Register ``callback`` for review updates on ``vendor_id``."""
    global _next_subscription_id
    with lock:
        get_vendor(vendor_id)
        _next_subscription_id += 1
        token = _next_subscription_id
        _subscribers.setdefault(vendor_id, {})[token] = callback
    return Subscription(vendor_id, token)


def subscriber_count(vendor_id: str) -> int:
    with lock:
        return len(_subscribers.get(vendor_id, {}))


def clear_store() -> None:
    with lock:
        _vendors.clear()
        _reviews.clear()
        _subscribers.clear()
