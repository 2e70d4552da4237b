"""Split search strategies."""
from team_maker.services.strategies.base import Evaluator, PartitionStrategy
from team_maker.services.strategies.exhaustive import ExhaustiveStrategy
from team_maker.services.strategies.local_search import LocalSearchStrategy

__all__ = [
    "Evaluator",
    "PartitionStrategy",
    "ExhaustiveStrategy",
    "LocalSearchStrategy",
]
