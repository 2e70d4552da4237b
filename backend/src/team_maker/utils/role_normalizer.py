"""Centralized role normalization utility.

All role handling in the codebase should go through this module to keep the
format consistent. The canonical format is lowercase:
top, jungle, mid, marksman, support.
"""

from typing import Iterable, Optional

# Canonical roles - the standard format used throughout the application
CANONICAL_ROLES = frozenset({"top", "jungle", "mid", "marksman", "support"})

# Role ordering for consistent display/sorting and deterministic assignment
ROLE_ORDER = ["top", "jungle", "mid", "marksman", "support"]

# Roles that make up the bottom lane pairing
BOT_LANE_ROLES = frozenset({"marksman", "support"})

# Solo lanes compared head to head when scoring
SOLO_LANE_ROLES = ["top", "jungle", "mid"]

# Mapping from any known role format to canonical lowercase
ROLE_ALIASES: dict[str, str] = {
    # Top lane variations
    "top": "top",
    "top laner": "top",
    "toplane": "top",

    # Jungle variations
    "jungle": "jungle",
    "jungler": "jungle",
    "jug": "jungle",
    "jng": "jungle",
    "jg": "jungle",

    # Mid lane variations
    "mid": "mid",
    "middle": "mid",
    "mid laner": "mid",
    "midlane": "mid",

    # Marksman variations - bot lane carry normalizes to "marksman"
    "marksman": "marksman",
    "adc": "marksman",
    "ad carry": "marksman",
    "bot": "marksman",
    "bottom": "marksman",
    "carry": "marksman",

    # Support variations
    "support": "support",
    "sup": "support",
    "supp": "support",
    "utility": "support",
}


def normalize_role(role: Optional[str]) -> Optional[str]:
    """Normalize a role string to canonical lowercase format.

    Args:
        role: Role string in any known format (e.g., "JUG", "jungle", "ADC")

    Returns:
        Normalized role string or None if invalid/None

    Examples:
        >>> normalize_role("JUG")
        'jungle'
        >>> normalize_role("ADC")
        'marksman'
        >>> normalize_role(None)
    """
    if role is None:
        return None
    return ROLE_ALIASES.get(role.strip().lower())


def normalize_role_strict(role: str) -> str:
    """Normalize a role string, raising ValueError if unknown."""
    normalized = normalize_role(role)
    if normalized is None:
        raise ValueError(f"Unknown role: {role}")
    return normalized


def normalize_roles(roles: Iterable[str]) -> frozenset[str]:
    """Normalize a collection of role strings, rejecting unknown ones."""
    return frozenset(normalize_role_strict(role) for role in roles)


def is_valid_role(role: Optional[str]) -> bool:
    """Check if a role string can be normalized."""
    return normalize_role(role) is not None


def role_index(role: Optional[str]) -> int:
    """Position of a role in ROLE_ORDER, unknown roles sort last."""
    normalized = normalize_role(role)
    return ROLE_ORDER.index(normalized) if normalized else len(ROLE_ORDER)


def sort_by_role(participants: list, role_attr: str = "assigned_role") -> list:
    """Sort participants by role in standard order (top ... support).

    Args:
        participants: Objects carrying a role attribute
        role_attr: Attribute name holding the role (default: "assigned_role")

    Returns:
        New list sorted by canonical role order
    """
    return sorted(participants, key=lambda p: role_index(getattr(p, role_attr, None)))
