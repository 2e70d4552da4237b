"""Tests for split balance scoring."""
import pytest

from team_maker.config import SearchConfig
from team_maker.models.participant import Participant
from team_maker.services.scorers.balance_scorer import BalanceScorer
from team_maker.utils.role_normalizer import ROLE_ORDER


def _team(prefix, ratings, roles=ROLE_ORDER):
    return [
        Participant(id=f"{prefix}{i}", name=f"{prefix}{i}", rating=rating, assigned_role=role)
        for i, (rating, role) in enumerate(zip(ratings, roles))
    ]


@pytest.fixture
def scorer():
    return BalanceScorer(SearchConfig())


def test_weighted_score_combines_components(scorer):
    """total + 1.5 * bot + 0.5 * max solo lane gap."""
    blue = _team("b", [1000, 1000, 1000, 1000, 1000])
    red = _team("r", [1200, 900, 1000, 1100, 800])

    breakdown = scorer.evaluate(blue, red)

    assert breakdown.total_diff == 0
    assert breakdown.bot_diff == 100  # 2000 vs 1900
    assert breakdown.lane_diff == 200  # top 1000 vs 1200
    assert breakdown.score == pytest.approx(0 + 150 + 100)


def test_total_diff_uses_sums(scorer):
    blue = _team("b", [3000, 2700, 1000, 700, 500])
    red = _team("r", [2900, 2800, 900, 800, 600])
    assert scorer.evaluate(blue, red).total_diff == 100


def test_roleless_teams_score_total_only(scorer):
    """Without assigned roles only the aggregate difference counts."""
    blue = [Participant(id="a", name="a", rating=1500), Participant(id="b", name="b", rating=900)]
    red = [Participant(id="c", name="c", rating=1200), Participant(id="d", name="d", rating=1000)]

    breakdown = scorer.evaluate(blue, red)

    assert breakdown.total_diff == 200
    assert breakdown.bot_diff == 0
    assert breakdown.lane_diff == 0
    assert breakdown.score == 200


def test_lane_diff_ignores_unmatched_roles(scorer):
    """A solo lane only counts when both sides have it."""
    blue = _team("b", [1000, 1500], roles=["top", "marksman"])
    red = _team("r", [1300, 1500], roles=["mid", "marksman"])
    assert scorer.evaluate(blue, red).lane_diff == 0


def test_scoring_is_pure(scorer):
    """Same teams give the same score and are left untouched."""
    blue = _team("b", [1800, 1200, 1600, 1400, 900])
    red = _team("r", [1700, 1300, 1500, 1000, 1100])
    before = [(p.id, p.rating, p.assigned_role) for p in blue + red]

    first = scorer.evaluate(blue, red)
    second = scorer.evaluate(blue, red)

    assert first == second
    assert [(p.id, p.rating, p.assigned_role) for p in blue + red] == before


def test_weights_are_configurable():
    scorer = BalanceScorer(SearchConfig(bot_lane_weight=1.0, solo_lane_weight=0.0))
    blue = _team("b", [1000, 1000, 1000, 1000, 1000])
    red = _team("r", [1200, 900, 1000, 1100, 800])
    assert scorer.score(blue, red) == pytest.approx(100)
