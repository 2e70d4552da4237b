"""Data models for the team maker."""

from team_maker.models.participant import Participant, SplitMode
from team_maker.models.session import SessionState, TeamMakerSession
from team_maker.models.result import (
    Candidate,
    PreviousPartition,
    ScoreBreakdown,
    SlotRef,
    TeamResult,
)

__all__ = [
    "Participant",
    "SplitMode",
    "Candidate",
    "PreviousPartition",
    "ScoreBreakdown",
    "SlotRef",
    "TeamResult",
    "SessionState",
    "TeamMakerSession",
]
