"""Utility modules for team_maker."""

from team_maker.utils.role_normalizer import (
    BOT_LANE_ROLES,
    CANONICAL_ROLES,
    ROLE_ALIASES,
    ROLE_ORDER,
    SOLO_LANE_ROLES,
    normalize_role,
    normalize_role_strict,
    normalize_roles,
    is_valid_role,
    sort_by_role,
)
from team_maker.utils.rank_ladder import TierLabel, rating_to_tier, tier_to_rating

__all__ = [
    "BOT_LANE_ROLES",
    "CANONICAL_ROLES",
    "ROLE_ALIASES",
    "ROLE_ORDER",
    "SOLO_LANE_ROLES",
    "normalize_role",
    "normalize_role_strict",
    "normalize_roles",
    "is_valid_role",
    "sort_by_role",
    "TierLabel",
    "rating_to_tier",
    "tier_to_rating",
]
