from __future__ import annotations

import logging
from typing import Any

from ..auth.users import increment_profile
from ..rewards.config import DEFAULT_REWARDS_CONFIG, RewardsConfig
from . import store
from .models import Review, ReviewCreate, Vendor, VendorCreate, VendorStatus

logger = logging.getLogger(__name__)


def submit_vendor(
    data: VendorCreate,
    user: dict[str, Any],
    config: RewardsConfig = DEFAULT_REWARDS_CONFIG,
) -> Vendor:
    """
    Create a pending vendor and award the submitter's points as one step.

    If the points award fails the vendor is removed again and the error
    propagates, so a listing never exists without its award.
    """
    with store.lock:
        vendor = store.add_vendor(data, added_by=user["id"])
        try:
            increment_profile(user["id"], points=config.vendor_points, vendors_added=1)
        except Exception:
            logger.error("Points award failed for vendor %s; rolling back", vendor.id)
            store.remove_vendor(vendor.id)
            raise
    logger.info("Vendor %s submitted by %s", vendor.id, user["id"])
    return vendor


def submit_review(
    vendor_id: str,
    data: ReviewCreate,
    user: dict[str, Any],
    config: RewardsConfig = DEFAULT_REWARDS_CONFIG,
) -> Review:
    """
    Append a review to an approved vendor and award the author's points.

    Raises ``store.VendorNotFound`` for unknown or unapproved vendors.
    """
    with store.lock:
        vendor = store.get_vendor(vendor_id)
        if vendor.status != VendorStatus.approved:
            raise store.VendorNotFound(vendor_id)
        review = store.add_review(vendor_id, data, author=user.get("name") or "Anonymous")
        try:
            increment_profile(user["id"], points=config.review_points, reviews_given=1)
        except Exception:
            logger.error("Points award failed for review %s; rolling back", review.id)
            store.remove_review(vendor_id, review.id)
            raise

    store.notify_review_subscribers(vendor_id)
    return review
