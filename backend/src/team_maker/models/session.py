"""Team maker session state."""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from team_maker.models.participant import Participant, SplitMode
from team_maker.models.result import TeamResult
from team_maker.utils.role_normalizer import ROLE_ORDER


class SessionState(str, Enum):
    """Lifecycle of a session."""

    EMPTY = "empty"  # No participants
    COLLECTING = "collecting"  # Participants, but not enough for the mode
    READY = "ready"  # Enough participants to build teams
    RESOLVED = "resolved"  # Teams built


@dataclass
class TeamMakerSession:
    """Roster and current result for one team maker lobby."""

    session_id: str
    mode: SplitMode = SplitMode.FIVE_ROLE
    participants: list[Participant] = field(default_factory=list)
    result: Optional[TeamResult] = None
    created_at: float = field(default_factory=time.time)
    last_access: float = field(default_factory=time.time)

    @property
    def meets_mode_requirement(self) -> bool:
        count = len(self.participants)
        if self.mode == SplitMode.FIVE_ROLE:
            return count >= 2 * len(ROLE_ORDER)
        return count >= 2 and count % 2 == 0

    @property
    def state(self) -> SessionState:
        if self.result is not None:
            return SessionState.RESOLVED
        if not self.participants:
            return SessionState.EMPTY
        if self.meets_mode_requirement:
            return SessionState.READY
        return SessionState.COLLECTING

    def find(self, participant_id: str) -> Optional[Participant]:
        return next((p for p in self.participants if p.id == participant_id), None)

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "mode": self.mode.value,
            "state": self.state.value,
            "participants": [p.to_dict() for p in self.participants],
            "result": self.result.to_dict() if self.result else None,
        }
