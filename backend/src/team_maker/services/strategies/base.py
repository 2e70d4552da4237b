"""Common interface for split search strategies."""
import random
from abc import ABC, abstractmethod
from typing import Callable, Optional

from team_maker.models.participant import Participant
from team_maker.models.result import Candidate

# Turns a raw split into a scored candidate, or None when the split is rejected
Evaluator = Callable[[list[Participant], list[Participant]], Optional[Candidate]]


class PartitionStrategy(ABC):
    """Explores two-team splits of a roster and keeps the lowest-scoring one."""

    name = "base"

    @abstractmethod
    def search(
        self,
        players: list[Participant],
        team_size: int,
        evaluate: Evaluator,
        rng: random.Random,
    ) -> Optional[Candidate]:
        """Return the best accepted candidate, or None if every split was rejected."""


def better(candidate: Optional[Candidate], best: Optional[Candidate]) -> bool:
    return candidate is not None and (best is None or candidate.score < best.score)
