"""Single-pass search for the best balanced split of a roster."""
import itertools
import logging
import random
from dataclasses import replace
from typing import Optional

from team_maker.config import SearchConfig
from team_maker.errors import InfeasibleStrictConstraint
from team_maker.models.participant import Participant, SplitMode
from team_maker.models.result import Candidate, PreviousPartition
from team_maker.services.role_assignor import RoleAssignor
from team_maker.services.scorers.balance_scorer import BalanceScorer
from team_maker.services.strategies import (
    ExhaustiveStrategy,
    LocalSearchStrategy,
    PartitionStrategy,
)
from team_maker.utils.role_normalizer import ROLE_ORDER

logger = logging.getLogger(__name__)

# One slot per role on each side
SLOTS_PER_ROLE = 2


def find_undersupplied_roles(
    participants: list[Participant], slots_per_role: int = SLOTS_PER_ROLE
) -> list[str]:
    """Roles whose slots cannot hold every strict player confined to them.

    For each set of roles, counts the strict players whose preferences lie
    entirely inside it. When that count exceeds the slots the set offers, no
    split can honour every strict commitment. Only minimal offending sets are
    reported, so three strict mid-only players name ``mid`` alone.

    Returns:
        Offending roles in canonical order, empty when strict commitments fit
    """
    strict = [p for p in participants if p.is_strict]
    offending: list[frozenset[str]] = []
    for size in range(1, len(ROLE_ORDER) + 1):
        for subset in itertools.combinations(ROLE_ORDER, size):
            roles = frozenset(subset)
            if any(found <= roles for found in offending):
                continue
            confined = sum(1 for p in strict if p.preferred_roles <= roles)
            if confined > slots_per_role * len(roles):
                offending.append(roles)

    named = set().union(*offending)
    return [role for role in ROLE_ORDER if role in named]


class PartitionSearch:
    """Finds the lowest-scoring valid split of one shuffled roster.

    Every split goes through the same pipeline: drop it if it repeats the
    previous grouping, assign roles to both sides (five-role mode), drop it
    if a strict member ended up off their preferences, then score it.
    Role-less searches clear any assigned roles first, so they are scored on
    the total difference alone.
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        scorer: Optional[BalanceScorer] = None,
        assignor: Optional[RoleAssignor] = None,
        strategy: Optional[PartitionStrategy] = None,
    ):
        self.config = config or SearchConfig.from_settings()
        self.scorer = scorer or BalanceScorer(self.config)
        self.assignor = assignor or RoleAssignor()
        self._strategy = strategy

    def strategy_for(self, roster_size: int) -> PartitionStrategy:
        """Pick exhaustive enumeration for small rosters, local search beyond."""
        if self._strategy is not None:
            return self._strategy
        if roster_size <= self.config.max_exhaustive_roster_size:
            return ExhaustiveStrategy(
                max_combinations=self.config.max_combinations,
                max_roster_size=self.config.max_exhaustive_roster_size,
            )
        return LocalSearchStrategy(
            max_evaluations=self.config.max_combinations,
            restarts=self.config.local_search_restarts,
        )

    def find_split(
        self,
        roster: list[Participant],
        mode: SplitMode = SplitMode.FIVE_ROLE,
        previous: Optional[PreviousPartition] = None,
        rng: Optional[random.Random] = None,
    ) -> Optional[Candidate]:
        """Search one random ordering of the roster.

        Returns:
            Best valid candidate, or None if every split was rejected

        Raises:
            InfeasibleStrictConstraint: No split can satisfy strict role
                commitments (five-role mode only)
        """
        rng = rng or random.Random()
        if mode == SplitMode.ROLELESS:
            # Leftover roles from an earlier five-role split must not be scored
            shuffled = [replace(p, assigned_role=None) for p in roster]
        else:
            shuffled = list(roster)
        rng.shuffle(shuffled)

        strategy = self.strategy_for(len(shuffled))
        logger.debug(
            f"Searching {len(shuffled)} players with {strategy.name}: "
            f"{sum(1 for p in shuffled if p.is_strict)} strict"
        )

        def evaluate(team1: list[Participant], team2: list[Participant]) -> Optional[Candidate]:
            if previous is not None and previous.is_repeat(
                frozenset(p.id for p in team1), frozenset(p.id for p in team2)
            ):
                return None
            if mode == SplitMode.FIVE_ROLE:
                team1 = self.assignor.assign(team1)
                team2 = self.assignor.assign(team2)
                if not (self.assignor.is_valid(team1) and self.assignor.is_valid(team2)):
                    return None
            return Candidate(team1, team2, self.scorer.evaluate(team1, team2))

        best = strategy.search(shuffled, len(shuffled) // 2, evaluate, rng)

        if best is None and mode == SplitMode.FIVE_ROLE:
            undersupplied = find_undersupplied_roles(roster)
            if undersupplied:
                logger.warning(f"Strict role commitments cannot be met: {undersupplied}")
                raise InfeasibleStrictConstraint(undersupplied)
        return best
