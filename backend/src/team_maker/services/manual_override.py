"""Manual slot swaps on a resolved result."""
import logging
from typing import Optional

from team_maker.models.result import SlotRef, TeamResult
from team_maker.services.scorers.balance_scorer import BalanceScorer
from team_maker.utils.role_normalizer import normalize_role_strict

logger = logging.getLogger(__name__)


def _slot_index(result: TeamResult, slot: SlotRef) -> int:
    team = result.team(slot.side)
    if slot.role is not None:
        role = normalize_role_strict(slot.role)
        for i, member in enumerate(team):
            if member.assigned_role == role:
                return i
        raise ValueError(f"No {role} on {slot.side} team")
    if slot.position is not None:
        if not 0 <= slot.position < len(team):
            raise ValueError(f"No position {slot.position} on {slot.side} team")
        return slot.position
    raise ValueError("Slot needs a role or a position")


def swap_slots(
    result: TeamResult,
    slot_a: SlotRef,
    slot_b: SlotRef,
    scorer: Optional[BalanceScorer] = None,
) -> TeamResult:
    """Exchange the occupants of two slots in place.

    Roles stay with the slot, so each occupant takes over the other's role
    and, across teams, the other's team. Strict preferences are not checked.
    Averages, tier labels and the score are recomputed from the new
    membership.
    """
    team_a = result.team(slot_a.side)
    team_b = result.team(slot_b.side)
    i = _slot_index(result, slot_a)
    j = _slot_index(result, slot_b)

    first, second = team_a[i], team_b[j]
    first.assigned_role, second.assigned_role = second.assigned_role, first.assigned_role
    team_a[i], team_b[j] = second, first

    result.recompute(scorer or BalanceScorer())
    logger.info(f"Swapped {first.name} and {second.name}: diff now {result.diff:.1f}")
    return result
