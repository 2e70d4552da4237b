"""Participant and mode models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from team_maker.utils.role_normalizer import CANONICAL_ROLES


class SplitMode(str, Enum):
    """How a roster is split into teams."""

    FIVE_ROLE = "five_role"  # 5v5, every team covers each role once
    ROLELESS = "roleless"  # any even roster, no role assignment


@dataclass
class Participant:
    """A roster entry taking part in a split."""

    id: str
    name: str
    rating: float
    preferred_roles: frozenset[str] = field(default_factory=lambda: CANONICAL_ROLES)
    strict: bool = False
    pinned: bool = False
    assigned_role: Optional[str] = None

    @property
    def is_strict(self) -> bool:
        """Strict flag only binds when preferences actually narrow the roles."""
        return self.strict and 0 < len(self.preferred_roles) < len(CANONICAL_ROLES)

    def accepts(self, role: Optional[str]) -> bool:
        return role in self.preferred_roles

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "rating": self.rating,
            "preferred_roles": sorted(self.preferred_roles),
            "strict": self.strict,
            "pinned": self.pinned,
            "assigned_role": self.assigned_role,
        }
