"""Greedy role assignment for five-member teams."""
from dataclasses import replace

from team_maker.models.participant import Participant
from team_maker.utils.role_normalizer import ROLE_ORDER, sort_by_role


class RoleAssignor:
    """Assigns each of the five roles to exactly one team member.

    Most-constrained-first: strict members are placed before flexible ones,
    and within each group members with fewer preferred roles go first. A
    member whose preferred roles are all taken still gets a free role, so the
    output always covers every role; callers must check ``is_valid`` to
    reject assignments that broke a strict commitment.
    """

    ROLES = ROLE_ORDER

    def assign(self, team: list[Participant]) -> list[Participant]:
        """Return copies of the members with ``assigned_role`` set, in role order."""
        if len(team) != len(self.ROLES):
            raise ValueError(
                f"Need exactly {len(self.ROLES)} members for role assignment, got {len(team)}"
            )

        available = list(self.ROLES)
        strict = [p for p in team if p.is_strict]
        flexible = [p for p in team if not p.is_strict]

        assignments = []
        for member in _fewest_options_first(strict) + _fewest_options_first(flexible):
            role = next((r for r in available if member.accepts(r)), available[0])
            available.remove(role)
            assignments.append(replace(member, assigned_role=role))

        return sort_by_role(assignments)

    @staticmethod
    def is_valid(team: list[Participant]) -> bool:
        """Every strict member landed on one of their preferred roles."""
        return all(not p.is_strict or p.accepts(p.assigned_role) for p in team)


def _fewest_options_first(members: list[Participant]) -> list[Participant]:
    # sorted() is stable, so ties keep roster order
    return sorted(members, key=lambda p: len(p.preferred_roles))
