"""Conversion between ranked ladder positions and rating scalars.

A rating scalar is an ordinal proxy for skill: each tier spans 400 points,
each division 100, and league points are added on top. Apex tiers
(Master and above) have no divisions.
"""

from dataclasses import dataclass
from typing import Optional

TIER_FLOORS: dict[str, int] = {
    "IRON": 0,
    "BRONZE": 400,
    "SILVER": 800,
    "GOLD": 1200,
    "PLATINUM": 1600,
    "EMERALD": 2000,
    "DIAMOND": 2400,
    "MASTER": 2800,
    "GRANDMASTER": 3200,
    "CHALLENGER": 3600,
}

DIVISION_OFFSETS: dict[str, int] = {
    "IV": 0,
    "III": 100,
    "II": 200,
    "I": 300,
}

APEX_TIERS = ("CHALLENGER", "GRANDMASTER", "MASTER")
DIVISION_BANDS = [(300, "I"), (200, "II"), (100, "III"), (0, "IV")]


@dataclass(frozen=True)
class TierLabel:
    """Display label for a rating, e.g. GOLD II."""

    tier: str
    division: str = ""

    def __str__(self) -> str:
        return f"{self.tier} {self.division}".strip()


def tier_to_rating(tier: Optional[str], division: Optional[str] = None, lp: int = 0) -> int:
    """Convert a ladder position to a rating scalar.

    Unknown tiers (including UNRANKED) count as the bottom of the ladder.
    """
    tier_value = TIER_FLOORS.get((tier or "").upper(), 0)
    division_value = DIVISION_OFFSETS.get((division or "").upper(), 0)
    return tier_value + division_value + (lp or 0)


def rating_to_tier(rating: float) -> TierLabel:
    """Convert a rating scalar back to the closest ladder label."""
    for tier in APEX_TIERS:
        if rating >= TIER_FLOORS[tier]:
            return TierLabel(tier, "I")

    for tier in reversed(list(TIER_FLOORS)):
        if tier in APEX_TIERS:
            continue
        floor = TIER_FLOORS[tier]
        if rating >= floor:
            within_tier = rating - floor
            for band, division in DIVISION_BANDS:
                if within_tier >= band:
                    return TierLabel(tier, division)

    return TierLabel("UNRANKED")
