"""Session operations: roster edits, building, rerolls and swaps."""
import logging
import random
from dataclasses import replace
from typing import Optional

from team_maker.config import settings
from team_maker.errors import InvalidRosterSize, SessionStateError, UnknownParticipant
from team_maker.models.participant import Participant, SplitMode
from team_maker.models.result import SlotRef, TeamResult
from team_maker.models.session import SessionState, TeamMakerSession
from team_maker.services.manual_override import swap_slots
from team_maker.services.team_builder_service import FIVE_ROLE_ROSTER_SIZE, TeamBuilderService

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {"name", "rating", "preferred_roles", "strict", "pinned"}


def select_lobby(
    participants: list[Participant],
    size: int,
    rng: random.Random,
    mode: SplitMode = SplitMode.FIVE_ROLE,
) -> list[Participant]:
    """Choose ``size`` participants, always keeping pinned ones.

    Unpinned participants fill the remaining places at random. Roster order
    is preserved in the returned list.

    Raises:
        InvalidRosterSize: More pinned participants than places
    """
    if len(participants) <= size:
        return list(participants)

    pinned = [p for p in participants if p.pinned]
    if len(pinned) > size:
        raise InvalidRosterSize(len(pinned), mode.value, f"at most {size} pinned")

    unpinned = [p for p in participants if not p.pinned]
    chosen = {p.id for p in pinned}
    chosen.update(p.id for p in rng.sample(unpinned, size - len(pinned)))
    return [p for p in participants if p.id in chosen]


def _check_name_free(
    session: TeamMakerSession, name: str, exclude_id: Optional[str] = None
) -> None:
    """Names are unique per session, ignoring case."""
    for p in session.participants:
        if p.id != exclude_id and p.name.lower() == name.lower():
            raise ValueError(f"{name} is already registered")


class SessionService:
    """Drives a TeamMakerSession through its states.

    Any roster edit discards the current result, so a session only stays
    resolved across rerolls and manual swaps.
    """

    def __init__(
        self,
        builder: Optional[TeamBuilderService] = None,
        max_roster_size: Optional[int] = None,
    ):
        self.builder = builder or TeamBuilderService()
        self.max_roster_size = max_roster_size or settings.max_roster_size

    @property
    def rng(self) -> random.Random:
        return self.builder.rng

    def add_participant(self, session: TeamMakerSession, participant: Participant) -> Participant:
        if len(session.participants) >= self.max_roster_size:
            raise SessionStateError(
                f"Roster is full ({self.max_roster_size} participants)"
            )
        if session.find(participant.id) is not None:
            raise ValueError(f"Participant {participant.id} already added")
        _check_name_free(session, participant.name)

        session.participants.append(participant)
        session.result = None
        return participant

    def remove_participant(self, session: TeamMakerSession, participant_id: str) -> None:
        participant = self._require(session, participant_id)
        session.participants.remove(participant)
        session.result = None

    def update_participant(
        self, session: TeamMakerSession, participant_id: str, **changes
    ) -> Participant:
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot edit {sorted(unknown)}")

        participant = self._require(session, participant_id)
        if "name" in changes:
            _check_name_free(session, changes["name"], exclude_id=participant_id)
        updated = replace(participant, **changes)
        index = session.participants.index(participant)
        session.participants[index] = updated
        session.result = None
        return updated

    def set_mode(self, session: TeamMakerSession, mode: SplitMode) -> None:
        if session.mode != mode:
            session.mode = mode
            session.result = None

    def build_teams(self, session: TeamMakerSession) -> TeamResult:
        """Build a fresh result, ignoring any previous one."""
        roster = self._lobby(session)
        session.result = self.builder.build_teams(roster, session.mode)
        return session.result

    def reroll(self, session: TeamMakerSession) -> TeamResult:
        """Replace the result with one that differs from it."""
        previous = self._require_result(session)
        lobby_ids = {p.id for p in previous.blue_team + previous.red_team}
        roster = [p for p in session.participants if p.id in lobby_ids]
        session.result = self.builder.build_teams(roster, session.mode, previous)
        return session.result

    def swap(self, session: TeamMakerSession, slot_a: SlotRef, slot_b: SlotRef) -> TeamResult:
        result = self._require_result(session)
        return swap_slots(result, slot_a, slot_b, self.builder.partition_search.scorer)

    def reset(self, session: TeamMakerSession) -> None:
        session.participants.clear()
        session.result = None

    def _lobby(self, session: TeamMakerSession) -> list[Participant]:
        if session.mode == SplitMode.FIVE_ROLE:
            return select_lobby(session.participants, FIVE_ROLE_ROSTER_SIZE, self.rng, session.mode)
        return list(session.participants)

    def _require(self, session: TeamMakerSession, participant_id: str) -> Participant:
        participant = session.find(participant_id)
        if participant is None:
            raise UnknownParticipant(participant_id)
        return participant

    def _require_result(self, session: TeamMakerSession) -> TeamResult:
        if session.state != SessionState.RESOLVED:
            raise SessionStateError(f"Session is {session.state.value}, build teams first")
        return session.result
