"""Randomized local search for rosters too large to enumerate."""
import random
from typing import Optional

from team_maker.models.participant import Participant
from team_maker.models.result import Candidate
from team_maker.services.strategies.base import Evaluator, PartitionStrategy, better


class _Budget:
    """Counts evaluations left for one search call."""

    def __init__(self, evaluate: Evaluator, limit: int):
        self._evaluate = evaluate
        self.remaining = limit

    def __call__(self, team1, team2) -> Optional[Candidate]:
        self.remaining -= 1
        return self._evaluate(team1, team2)

    @property
    def exhausted(self) -> bool:
        return self.remaining <= 0


class LocalSearchStrategy(PartitionStrategy):
    """Hill climbing over cross-team swaps with random restarts.

    Each restart starts from a random split and, on every pass, tries all
    cross-team member swaps and takes the one that lowers the score most,
    until no swap improves it. The total number of evaluated splits is capped
    at ``max_evaluations``.
    """

    name = "local_search"

    def __init__(self, max_evaluations: int = 5000, restarts: int = 20):
        self.max_evaluations = max_evaluations
        self.restarts = restarts

    def search(
        self,
        players: list[Participant],
        team_size: int,
        evaluate: Evaluator,
        rng: random.Random,
    ) -> Optional[Candidate]:
        budget = _Budget(evaluate, self.max_evaluations)
        best = None
        for _ in range(self.restarts):
            if budget.exhausted:
                break
            order = list(players)
            rng.shuffle(order)
            candidate = self._climb(order[:team_size], order[team_size:], budget)
            if better(candidate, best):
                best = candidate
        return best

    def _climb(
        self,
        team1: list[Participant],
        team2: list[Participant],
        budget: _Budget,
    ) -> Optional[Candidate]:
        current = budget(team1, team2)
        while not budget.exhausted:
            step = (current, team1, team2)
            for next1, next2 in _swaps(team1, team2):
                if budget.exhausted:
                    break
                candidate = budget(next1, next2)
                if better(candidate, step[0]):
                    step = (candidate, next1, next2)
            if step[0] is current:
                break
            current, team1, team2 = step
        return current


def _swaps(team1: list[Participant], team2: list[Participant]):
    """Every split reachable by exchanging one member across teams."""
    for i in range(len(team1)):
        for j in range(len(team2)):
            next1, next2 = list(team1), list(team2)
            next1[i], next2[j] = team2[j], team1[i]
            yield next1, next2
