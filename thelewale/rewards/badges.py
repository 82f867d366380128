from __future__ import annotations

from .config import DEFAULT_REWARDS_CONFIG, BadgeTier, RewardsConfig


def badge_for_points(
    points: int | None,
    config: RewardsConfig = DEFAULT_REWARDS_CONFIG,
) -> BadgeTier:
    """Return the highest tier whose threshold does not exceed ``points``."""
    badge = config.badges[0]
    if points is None:
        return badge
    for tier in config.badges:
        if points >= tier.min_points:
            badge = tier
    return badge


def badge_table(config: RewardsConfig = DEFAULT_REWARDS_CONFIG) -> dict:
    return {
        "points": {
            "add_vendor": config.vendor_points,
            "give_review": config.review_points,
        },
        "badges": [
            {"name": b.name, "min_points": b.min_points, "color": b.color}
            for b in config.badges
        ],
    }
