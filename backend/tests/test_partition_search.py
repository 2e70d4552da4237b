"""Tests for single-pass split search and its strategies."""
import random

import pytest

from team_maker.config import SearchConfig
from team_maker.errors import InfeasibleStrictConstraint
from team_maker.models.participant import Participant, SplitMode
from team_maker.models.result import Candidate, PreviousPartition, ScoreBreakdown
from team_maker.services.partition_search import PartitionSearch, find_undersupplied_roles
from team_maker.services.strategies import ExhaustiveStrategy, LocalSearchStrategy
from team_maker.services.strategies.local_search import _Budget
from team_maker.utils.role_normalizer import CANONICAL_ROLES, ROLE_ORDER


def _roster(ratings, strict_roles=None):
    """Build a roster; strict_roles maps index -> roles for strict players."""
    strict_roles = strict_roles or {}
    return [
        Participant(
            id=f"p{i}",
            name=f"Player{i}",
            rating=rating,
            preferred_roles=frozenset(strict_roles.get(i, CANONICAL_ROLES)),
            strict=i in strict_roles,
        )
        for i, rating in enumerate(ratings)
    ]


RATINGS = [3000, 2900, 2800, 2700, 1000, 900, 800, 700, 600, 500]


@pytest.fixture
def search():
    return PartitionSearch(SearchConfig())


# ======================================================================
# Strict role supply analysis
# ======================================================================


def test_undersupplied_names_oversubscribed_role():
    roster = _roster(RATINGS, {0: {"mid"}, 1: {"mid"}, 2: {"mid"}})
    assert find_undersupplied_roles(roster) == ["mid"]


def test_undersupplied_empty_when_pair_fits():
    roster = _roster(RATINGS, {0: {"mid"}, 1: {"mid"}})
    assert find_undersupplied_roles(roster) == []


def test_undersupplied_detects_shared_role_groups():
    """Five players confined to top/jungle only have four slots."""
    strict = {i: {"top", "jungle"} for i in range(5)}
    roster = _roster(RATINGS, strict)
    assert find_undersupplied_roles(roster) == ["top", "jungle"]


def test_undersupplied_ignores_non_strict_players():
    roster = _roster(RATINGS)
    for p in roster[:4]:
        p.preferred_roles = frozenset({"mid"})
    assert find_undersupplied_roles(roster) == []


# ======================================================================
# find_split
# ======================================================================


def test_find_split_returns_role_assigned_halves(search):
    roster = _roster(RATINGS)
    candidate = search.find_split(roster, SplitMode.FIVE_ROLE, rng=random.Random(7))

    assert candidate is not None
    team1_ids = {p.id for p in candidate.team1}
    team2_ids = {p.id for p in candidate.team2}
    assert len(team1_ids) == len(team2_ids) == 5
    assert team1_ids.isdisjoint(team2_ids)
    assert team1_ids | team2_ids == {p.id for p in roster}
    for team in (candidate.team1, candidate.team2):
        assert [p.assigned_role for p in team] == ROLE_ORDER


def test_find_split_honors_strict_pair(search):
    roster = _roster(RATINGS, {0: {"mid"}, 9: {"mid"}})
    candidate = search.find_split(roster, SplitMode.FIVE_ROLE, rng=random.Random(3))

    mids = {p.id for p in candidate.team1 + candidate.team2 if p.assigned_role == "mid"}
    assert mids == {"p0", "p9"}


def test_find_split_raises_when_strict_roles_oversubscribed(search):
    roster = _roster(RATINGS, {0: {"mid"}, 1: {"mid"}, 2: {"mid"}})
    with pytest.raises(InfeasibleStrictConstraint) as exc_info:
        search.find_split(roster, SplitMode.FIVE_ROLE, rng=random.Random(1))
    assert exc_info.value.roles == ["mid"]
    assert exc_info.value.code == "insufficient-strict-role-supply"


def test_find_split_skips_previous_grouping_on_both_sides(search):
    """With two players every split repeats the previous one."""
    roster = _roster([1500, 1000])
    previous = PreviousPartition(team_a_ids=frozenset({"p0"}))
    assert search.find_split(roster, SplitMode.ROLELESS, previous, random.Random(0)) is None


def test_roleless_split_minimizes_total_diff(search):
    roster = _roster(RATINGS)
    candidate = search.find_split(roster, SplitMode.ROLELESS, rng=random.Random(11))

    assert candidate.breakdown.total_diff == 100
    assert all(p.assigned_role is None for p in candidate.team1 + candidate.team2)


def test_roleless_split_ignores_leftover_roles(search):
    roster = _roster(RATINGS)
    for p, role in zip(roster, ROLE_ORDER * 2):
        p.assigned_role = role

    candidate = search.find_split(roster, SplitMode.ROLELESS, rng=random.Random(11))

    assert candidate.breakdown.bot_diff == 0
    assert candidate.breakdown.lane_diff == 0
    assert candidate.score == candidate.breakdown.total_diff
    assert all(p.assigned_role is None for p in candidate.team1 + candidate.team2)
    # The caller's roster keeps its roles
    assert [p.assigned_role for p in roster] == ROLE_ORDER * 2


def test_large_roster_uses_local_search():
    config = SearchConfig(max_exhaustive_roster_size=8)
    search = PartitionSearch(config)
    roster = _roster([1000 + 100 * i for i in range(12)])

    assert isinstance(search.strategy_for(len(roster)), LocalSearchStrategy)
    assert isinstance(search.strategy_for(8), ExhaustiveStrategy)

    candidate = search.find_split(roster, SplitMode.ROLELESS, rng=random.Random(5))
    assert len(candidate.team1) == len(candidate.team2) == 6
    assert candidate.breakdown.total_diff <= 200


# ======================================================================
# Strategies
# ======================================================================


def _counting_evaluator(calls):
    def evaluate(team1, team2):
        calls.append((team1, team2))
        diff = abs(sum(p.rating for p in team1) - sum(p.rating for p in team2))
        return Candidate(team1, team2, ScoreBreakdown(total_diff=diff, score=diff))

    return evaluate


def test_exhaustive_respects_combination_cap():
    calls = []
    strategy = ExhaustiveStrategy(max_combinations=3, max_roster_size=16)
    strategy.search(_roster([1, 2, 3, 4, 5, 6]), 3, _counting_evaluator(calls), random.Random(0))
    assert len(calls) == 3


def test_exhaustive_visits_every_split_under_cap():
    calls = []
    strategy = ExhaustiveStrategy(max_combinations=5000, max_roster_size=16)
    strategy.search(_roster([1, 2, 3, 4, 5, 6]), 3, _counting_evaluator(calls), random.Random(0))
    assert len(calls) == 20  # C(6, 3)


def test_exhaustive_refuses_oversized_roster():
    strategy = ExhaustiveStrategy(max_combinations=10, max_roster_size=4)
    with pytest.raises(ValueError):
        strategy.search(_roster([1] * 6), 3, _counting_evaluator([]), random.Random(0))


def test_local_search_stays_within_budget():
    calls = []
    strategy = LocalSearchStrategy(max_evaluations=50, restarts=100)
    best = strategy.search(
        _roster([100 * i for i in range(20)]), 10, _counting_evaluator(calls), random.Random(2)
    )
    assert len(calls) <= 50
    assert best is not None


def test_local_search_takes_the_steepest_swap():
    """From {p0, p1} the first improving swap reaches a dead end at 8; the steepest reaches 1."""
    scores = {
        frozenset({"p0", "p1"}): 10,
        frozenset({"p1", "p2"}): 9,
        frozenset({"p1", "p3"}): 8,
        frozenset({"p0", "p2"}): 1,
    }

    def evaluate(team1, team2):
        score = scores.get(frozenset(p.id for p in team1), 20)
        return Candidate(team1, team2, ScoreBreakdown(total_diff=score, score=score))

    players = _roster([0, 0, 0, 0])
    strategy = LocalSearchStrategy(max_evaluations=100, restarts=1)
    best = strategy._climb(players[:2], players[2:], _Budget(evaluate, 100))

    assert {p.id for p in best.team1} == {"p0", "p2"}
    assert best.score == 1
