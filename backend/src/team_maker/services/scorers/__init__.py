"""Scoring components for team splits."""
from team_maker.services.scorers.balance_scorer import BalanceScorer

__all__ = ["BalanceScorer"]
