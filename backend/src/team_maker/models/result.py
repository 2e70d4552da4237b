"""Team split results and the values threaded between searches."""

from dataclasses import dataclass, field
from typing import Literal, Optional

from team_maker.models.participant import Participant, SplitMode
from team_maker.utils.rank_ladder import TierLabel, rating_to_tier

Side = Literal["blue", "red"]


@dataclass(frozen=True)
class ScoreBreakdown:
    """Components of a split score. Lower is better."""

    total_diff: float
    bot_diff: float = 0.0
    lane_diff: float = 0.0
    score: float = 0.0


@dataclass
class Candidate:
    """A scored split produced by a single partition search."""

    team1: list[Participant]
    team2: list[Participant]
    breakdown: ScoreBreakdown

    @property
    def score(self) -> float:
        return self.breakdown.score


def average_rating(team: list[Participant]) -> float:
    if not team:
        return 0.0
    return sum(p.rating for p in team) / len(team)


@dataclass
class TeamResult:
    """Resolved split: blue is team A, red is team B."""

    blue_team: list[Participant]
    red_team: list[Participant]
    mode: SplitMode = SplitMode.FIVE_ROLE
    breakdown: Optional[ScoreBreakdown] = None
    avg_rating_blue: float = 0.0
    avg_rating_red: float = 0.0
    avg_tier_blue: TierLabel = field(default_factory=lambda: TierLabel("UNRANKED"))
    avg_tier_red: TierLabel = field(default_factory=lambda: TierLabel("UNRANKED"))
    diff: float = 0.0

    def __post_init__(self):
        self.recompute_aggregates()

    def recompute_aggregates(self) -> None:
        """Re-derive averages, tier labels and diff from current membership."""
        self.avg_rating_blue = average_rating(self.blue_team)
        self.avg_rating_red = average_rating(self.red_team)
        self.avg_tier_blue = rating_to_tier(round(self.avg_rating_blue))
        self.avg_tier_red = rating_to_tier(round(self.avg_rating_red))
        self.diff = abs(self.avg_rating_blue - self.avg_rating_red)

    def recompute(self, scorer) -> None:
        """Re-derive aggregates and the score breakdown with ``scorer``."""
        self.recompute_aggregates()
        self.breakdown = scorer.evaluate(self.blue_team, self.red_team)

    def team(self, side: Side) -> list[Participant]:
        if side == "blue":
            return self.blue_team
        if side == "red":
            return self.red_team
        raise ValueError(f"Unknown side: {side}")

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "blue_team": [p.to_dict() for p in self.blue_team],
            "red_team": [p.to_dict() for p in self.red_team],
            "avg_rating_blue": self.avg_rating_blue,
            "avg_rating_red": self.avg_rating_red,
            "avg_tier_blue": str(self.avg_tier_blue),
            "avg_tier_red": str(self.avg_tier_red),
            "diff": self.diff,
            "score": self.breakdown.score if self.breakdown else None,
        }


@dataclass(frozen=True)
class PreviousPartition:
    """Team A membership and roles of the preceding result."""

    team_a_ids: frozenset[str]
    roles: dict[str, Optional[str]] = field(default_factory=dict)

    @classmethod
    def from_result(cls, result: TeamResult) -> "PreviousPartition":
        return cls(
            team_a_ids=frozenset(p.id for p in result.blue_team),
            roles={p.id: p.assigned_role for p in result.blue_team},
        )

    def is_repeat(self, team1_ids: frozenset[str], team2_ids: frozenset[str]) -> bool:
        """Same grouping as before, on either side."""
        return team1_ids == self.team_a_ids or team2_ids == self.team_a_ids


@dataclass(frozen=True)
class SlotRef:
    """Identifies a slot on a team, by role or by position for role-less splits."""

    side: Side
    role: Optional[str] = None
    position: Optional[int] = None
