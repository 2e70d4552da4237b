"""Balance scoring for two-team splits."""
from typing import Optional

from team_maker.config import SearchConfig
from team_maker.models.participant import Participant
from team_maker.models.result import ScoreBreakdown
from team_maker.utils.role_normalizer import BOT_LANE_ROLES, SOLO_LANE_ROLES


class BalanceScorer:
    """Scores a candidate split. Lower is better.

    The score combines three imbalances:
    - total: difference between the teams' summed ratings
    - bot: difference between the summed marksman + support ratings
    - lane: largest head-to-head gap among top/jungle/mid

    score = total + bot_lane_weight * bot + solo_lane_weight * lane

    Without assigned roles (role-less splits) only the total applies.
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        config = config or SearchConfig.from_settings()
        self.bot_lane_weight = config.bot_lane_weight
        self.solo_lane_weight = config.solo_lane_weight

    def evaluate(self, team1: list[Participant], team2: list[Participant]) -> ScoreBreakdown:
        """Score two teams, using role components when roles are assigned."""
        total_diff = abs(_rating_sum(team1) - _rating_sum(team2))

        if not _has_roles(team1) or not _has_roles(team2):
            return ScoreBreakdown(total_diff=total_diff, score=total_diff)

        bot_diff = abs(_bot_lane_sum(team1) - _bot_lane_sum(team2))
        lane_diff = self._max_lane_diff(team1, team2)
        score = (
            total_diff
            + bot_diff * self.bot_lane_weight
            + lane_diff * self.solo_lane_weight
        )
        return ScoreBreakdown(
            total_diff=total_diff,
            bot_diff=bot_diff,
            lane_diff=lane_diff,
            score=score,
        )

    def score(self, team1: list[Participant], team2: list[Participant]) -> float:
        return self.evaluate(team1, team2).score

    def _max_lane_diff(self, team1: list[Participant], team2: list[Participant]) -> float:
        diffs = []
        for role in SOLO_LANE_ROLES:
            p1 = _member_at(team1, role)
            p2 = _member_at(team2, role)
            if p1 and p2:
                diffs.append(abs(p1.rating - p2.rating))
        return max(diffs, default=0.0)


def _rating_sum(team: list[Participant]) -> float:
    return sum(p.rating for p in team)


def _bot_lane_sum(team: list[Participant]) -> float:
    return sum(p.rating for p in team if p.assigned_role in BOT_LANE_ROLES)


def _has_roles(team: list[Participant]) -> bool:
    return any(p.assigned_role for p in team)


def _member_at(team: list[Participant], role: str) -> Optional[Participant]:
    return next((p for p in team if p.assigned_role == role), None)
