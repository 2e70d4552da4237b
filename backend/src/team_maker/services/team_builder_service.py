"""Repeated split search with anti-repetition and fallback."""
import logging
import random
from dataclasses import replace
from typing import Optional, Union

from team_maker.config import SearchConfig
from team_maker.errors import InvalidRosterSize, SearchExhausted
from team_maker.models.participant import Participant, SplitMode
from team_maker.models.result import Candidate, PreviousPartition, ScoreBreakdown, TeamResult
from team_maker.services.partition_search import PartitionSearch
from team_maker.utils.role_normalizer import ROLE_ORDER

logger = logging.getLogger(__name__)

FIVE_ROLE_ROSTER_SIZE = 2 * len(ROLE_ORDER)


def validate_roster(roster: list[Participant], mode: SplitMode) -> None:
    """Reject rosters the selected mode cannot split.

    Raises:
        InvalidRosterSize: Five-role mode without exactly ten players, or a
            role-less roster that is odd or smaller than two
        ValueError: Duplicate participant ids
    """
    size = len(roster)
    if mode == SplitMode.FIVE_ROLE and size != FIVE_ROLE_ROSTER_SIZE:
        raise InvalidRosterSize(size, mode.value, f"exactly {FIVE_ROLE_ROSTER_SIZE}")
    if mode == SplitMode.ROLELESS and (size < 2 or size % 2):
        raise InvalidRosterSize(size, mode.value, "an even number (at least 2) of")
    if len({p.id for p in roster}) != size:
        raise ValueError("Roster contains duplicate participant ids")


class TeamBuilderService:
    """Builds a balanced TeamResult from a roster.

    Runs up to ``max_attempts`` partition searches, each over a fresh
    shuffle, and keeps the best candidate that is visibly different from
    the previous result. Stops early once a candidate is good enough. If
    the repetition filters reject everything, one unfiltered search is
    accepted instead.
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        partition_search: Optional[PartitionSearch] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or SearchConfig.from_settings()
        self.partition_search = partition_search or PartitionSearch(self.config)
        self.rng = rng or random.Random()

    def build_teams(
        self,
        roster: list[Participant],
        mode: SplitMode = SplitMode.FIVE_ROLE,
        previous: Optional[Union[TeamResult, PreviousPartition]] = None,
    ) -> TeamResult:
        """Split the roster into two teams.

        Args:
            roster: Participants to split
            mode: Five-role or role-less split
            previous: Result (or its partition) this call must differ from

        Raises:
            InvalidRosterSize: Roster does not fit the mode
            InfeasibleStrictConstraint: Strict roles cannot be satisfied
            SearchExhausted: Not even the unfiltered search found a split
        """
        validate_roster(roster, mode)
        if isinstance(previous, TeamResult):
            previous = PreviousPartition.from_result(previous)

        best: Optional[Candidate] = None
        attempts = 0
        for attempts in range(1, self.config.max_attempts + 1):
            candidate = self.partition_search.find_split(roster, mode, previous, self.rng)
            if candidate is None:
                continue
            if previous is not None and self._repeats(candidate, previous, mode):
                continue
            if best is None or candidate.score < best.score:
                best = candidate
            if self._good_enough(candidate.breakdown):
                break

        if best is None:
            logger.warning(
                f"No candidate passed after {attempts} attempts, retrying without repetition filter"
            )
            best = self.partition_search.find_split(roster, mode, None, self.rng)
            if best is None:
                raise SearchExhausted()

        logger.info(
            f"Built teams in {attempts} attempts: score={best.score:.1f} "
            f"total_diff={best.breakdown.total_diff:.0f} bot_diff={best.breakdown.bot_diff:.0f}"
        )
        return TeamResult(
            blue_team=[replace(p) for p in best.team1],
            red_team=[replace(p) for p in best.team2],
            mode=mode,
            breakdown=best.breakdown,
        )

    def _repeats(self, candidate: Candidate, previous: PreviousPartition, mode: SplitMode) -> bool:
        """Whether a candidate is too close to the previous result."""
        team1_ids = frozenset(p.id for p in candidate.team1)
        team2_ids = frozenset(p.id for p in candidate.team2)
        if previous.is_repeat(team1_ids, team2_ids):
            return True

        if mode == SplitMode.FIVE_ROLE:
            same_role = sum(
                1
                for p in candidate.team1
                if previous.roles.get(p.id) is not None
                and previous.roles.get(p.id) == p.assigned_role
            )
            if same_role > self.config.max_retained_roles:
                return True

        changed = len(team1_ids - previous.team_a_ids)
        return changed < self.config.min_changed_members

    def _good_enough(self, breakdown: ScoreBreakdown) -> bool:
        return (
            breakdown.total_diff <= self.config.good_enough_total_diff
            and breakdown.bot_diff <= self.config.good_enough_bot_diff
        )
