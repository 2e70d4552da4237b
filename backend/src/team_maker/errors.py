"""Errors surfaced by team building."""

from typing import Iterable, Optional


class TeamMakerError(ValueError):
    """Base error with a stable machine-readable code."""

    code = "team-maker-error"

    def to_dict(self) -> dict:
        return {"code": self.code, "message": str(self)}


class InfeasibleStrictConstraint(TeamMakerError):
    """Strict role commitments cannot be satisfied by any split."""

    code = "insufficient-strict-role-supply"

    def __init__(self, roles: Iterable[str]):
        self.roles = list(roles)
        joined = ", ".join(self.roles)
        super().__init__(
            f"Not enough strict players can fill {joined}. "
            f"Relax strict role matching or add {joined} to someone's preferences."
        )

    def to_dict(self) -> dict:
        return {**super().to_dict(), "roles": self.roles}


class SearchExhausted(TeamMakerError):
    """No balanced split was found within the search budget."""

    code = "no-balanced-split-found"

    def __init__(self, message: str = "No balanced split found"):
        super().__init__(message)


class InvalidRosterSize(TeamMakerError):
    """Roster size does not satisfy the selected mode."""

    code = "invalid-roster-size"

    def __init__(self, size: int, mode: str, required: str, message: Optional[str] = None):
        self.size = size
        self.mode = mode
        self.required = required
        super().__init__(message or f"{mode} needs {required} participants, got {size}")

    def to_dict(self) -> dict:
        return {
            **super().to_dict(),
            "size": self.size,
            "mode": self.mode,
            "required": self.required,
        }


class SessionStateError(TeamMakerError):
    """Operation is not allowed in the session's current state."""

    code = "invalid-session-state"


class UnknownParticipant(TeamMakerError):
    """No participant with the given id in the session."""

    code = "unknown-participant"

    def __init__(self, participant_id: str):
        self.participant_id = participant_id
        super().__init__(f"Unknown participant: {participant_id}")
