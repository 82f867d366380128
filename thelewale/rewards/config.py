from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BadgeTier:
    name: str
    min_points: int
    color: str


@dataclass(frozen=True)
class RewardsConfig:
    vendor_points: int = 75
    review_points: int = 10
    # Must stay ascending by min_points; the first tier is the floor.
    badges: tuple[BadgeTier, ...] = field(
        default=(
            BadgeTier("Newbie", 0, "gray"),
            BadgeTier("Contributor", 100, "blue"),
            BadgeTier("Vendor Specialist", 250, "green"),
            BadgeTier("Food Guru", 500, "yellow"),
        )
    )


DEFAULT_REWARDS_CONFIG = RewardsConfig()
