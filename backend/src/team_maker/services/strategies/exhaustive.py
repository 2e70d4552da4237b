"""Exhaustive enumeration of equal-size splits."""
import itertools
import random
from typing import Optional

from team_maker.models.participant import Participant
from team_maker.models.result import Candidate
from team_maker.services.strategies.base import Evaluator, PartitionStrategy, better


class ExhaustiveStrategy(PartitionStrategy):
    """Walks every choice of ``team_size`` roster positions for team 1.

    The number of splits grows as C(N, N/2), so enumeration is capped at
    ``max_combinations`` per call and refused outright for rosters larger
    than ``max_roster_size``.
    """

    name = "exhaustive"

    def __init__(self, max_combinations: int = 5000, max_roster_size: int = 16):
        self.max_combinations = max_combinations
        self.max_roster_size = max_roster_size

    def search(
        self,
        players: list[Participant],
        team_size: int,
        evaluate: Evaluator,
        rng: random.Random,
    ) -> Optional[Candidate]:
        if len(players) > self.max_roster_size:
            raise ValueError(
                f"Exhaustive search is limited to {self.max_roster_size} players, "
                f"got {len(players)}"
            )

        best = None
        positions = range(len(players))
        combos = itertools.combinations(positions, team_size)
        for combo in itertools.islice(combos, self.max_combinations):
            chosen = set(combo)
            team1 = [players[i] for i in combo]
            team2 = [players[i] for i in positions if i not in chosen]
            candidate = evaluate(team1, team2)
            if better(candidate, best):
                best = candidate
        return best
