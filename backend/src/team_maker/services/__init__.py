"""Team building services."""

from team_maker.services.manual_override import swap_slots
from team_maker.services.partition_search import PartitionSearch, find_undersupplied_roles
from team_maker.services.role_assignor import RoleAssignor
from team_maker.services.scorers import BalanceScorer
from team_maker.services.session_service import SessionService, select_lobby
from team_maker.services.team_builder_service import TeamBuilderService, validate_roster

__all__ = [
    "swap_slots",
    "PartitionSearch",
    "find_undersupplied_roles",
    "RoleAssignor",
    "BalanceScorer",
    "SessionService",
    "select_lobby",
    "TeamBuilderService",
    "validate_roster",
]
