"""REST endpoints for team maker sessions."""

import logging
import threading
import time
import uuid
from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from team_maker.config import settings
from team_maker.errors import (
    InvalidRosterSize,
    SessionStateError,
    TeamMakerError,
    UnknownParticipant,
)
from team_maker.models.participant import Participant, SplitMode
from team_maker.models.result import SlotRef
from team_maker.models.session import TeamMakerSession
from team_maker.services.session_service import SessionService
from team_maker.utils.rank_ladder import tier_to_rating
from team_maker.utils.role_normalizer import ROLE_ORDER, normalize_roles

logger = logging.getLogger(__name__)

# Constants
SESSION_TTL_SECONDS = settings.session_ttl_seconds
SESSION_CLEANUP_INTERVAL_SECONDS = 60

router = APIRouter(prefix="/api/team-maker", tags=["team-maker"])

# In-memory session storage with thread-safe access
_sessions: dict[str, TeamMakerSession] = {}
_sessions_lock = threading.Lock()
_session_locks: dict[str, threading.Lock] = {}
_cleanup_lock = threading.Lock()
_last_cleanup = 0.0


def _is_session_expired(session: TeamMakerSession, now: float) -> bool:
    return (now - session.last_access) >= SESSION_TTL_SECONDS


def _prune_expired_sessions(now: float | None = None) -> None:
    """Remove expired sessions opportunistically."""
    global _last_cleanup
    now = now or time.time()
    if now - _last_cleanup < SESSION_CLEANUP_INTERVAL_SECONDS:
        return

    with _cleanup_lock:
        if now - _last_cleanup < SESSION_CLEANUP_INTERVAL_SECONDS:
            return

        with _sessions_lock:
            expired = [
                session_id
                for session_id, session in _sessions.items()
                if _is_session_expired(session, now)
                and not (_session_locks.get(session_id) and _session_locks[session_id].locked())
            ]
            for session_id in expired:
                _sessions.pop(session_id, None)
                _session_locks.pop(session_id, None)

        _last_cleanup = now


def _get_session_with_lock(session_id: str) -> tuple[TeamMakerSession, threading.Lock]:
    """Fetch session and its lock, creating the lock if needed."""
    _prune_expired_sessions()
    with _sessions_lock:
        session = _sessions.get(session_id)
        if not session:
            raise HTTPException(status_code=404, detail="Session not found")
        lock = _session_locks.get(session_id)
        if lock is None:
            lock = threading.Lock()
            _session_locks[session_id] = lock

    session.last_access = time.time()
    return session, lock


def _get_service(request: Request) -> SessionService:
    """Get or lazily create the session service on app state."""
    if not hasattr(request.app.state, "session_service"):
        request.app.state.session_service = SessionService()
    return request.app.state.session_service


def _error_response(error: TeamMakerError) -> HTTPException:
    """Map team maker errors to HTTP errors carrying the error payload."""
    if isinstance(error, UnknownParticipant):
        status_code = 404
    elif isinstance(error, SessionStateError):
        status_code = 409
    elif isinstance(error, InvalidRosterSize):
        status_code = 422
    else:
        status_code = 400
    logger.info(f"Team maker error {error.code}: {error}")
    return HTTPException(status_code=status_code, detail=error.to_dict())


class CreateSessionRequest(BaseModel):
    mode: SplitMode = SplitMode.FIVE_ROLE


class ParticipantRequest(BaseModel):
    name: str
    id: Optional[str] = None
    rating: Optional[float] = None
    tier: Optional[str] = None
    division: Optional[str] = None
    lp: int = 0
    preferred_roles: list[str] = Field(default_factory=lambda: list(ROLE_ORDER))
    strict: bool = False
    pinned: bool = False


class UpdateParticipantRequest(BaseModel):
    name: Optional[str] = None
    rating: Optional[float] = None
    tier: Optional[str] = None
    division: Optional[str] = None
    preferred_roles: Optional[list[str]] = None
    strict: Optional[bool] = None
    pinned: Optional[bool] = None


class SlotRequest(BaseModel):
    side: Literal["blue", "red"]
    role: Optional[str] = None
    position: Optional[int] = None


class SwapRequest(BaseModel):
    slot_a: SlotRequest
    slot_b: SlotRequest


class ModeRequest(BaseModel):
    mode: SplitMode


def _rating_from(body: ParticipantRequest | UpdateParticipantRequest) -> Optional[float]:
    if body.rating is not None:
        return body.rating
    if body.tier is not None:
        return tier_to_rating(body.tier, body.division, getattr(body, "lp", 0))
    return None


@router.post("/sessions", status_code=201)
async def create_session(body: CreateSessionRequest):
    """Create an empty team maker session."""
    _prune_expired_sessions()
    session_id = f"tm_{uuid.uuid4().hex[:12]}"
    session = TeamMakerSession(session_id=session_id, mode=body.mode)
    with _sessions_lock:
        _sessions[session_id] = session
    logger.info(f"Created team maker session {session_id} ({body.mode.value})")
    return session.to_dict()


@router.get("/sessions/{session_id}")
async def get_session(session_id: str):
    session, _ = _get_session_with_lock(session_id)
    return session.to_dict()


@router.put("/sessions/{session_id}/mode")
async def set_mode(request: Request, session_id: str, body: ModeRequest):
    service = _get_service(request)
    session, lock = _get_session_with_lock(session_id)
    with lock:
        service.set_mode(session, body.mode)
        return session.to_dict()


@router.post("/sessions/{session_id}/participants", status_code=201)
async def add_participant(request: Request, session_id: str, body: ParticipantRequest):
    """Add a participant, rating taken directly or from their rank."""
    service = _get_service(request)
    session, lock = _get_session_with_lock(session_id)
    try:
        participant = Participant(
            id=body.id or uuid.uuid4().hex[:12],
            name=body.name,
            rating=_rating_from(body) or 0,
            preferred_roles=normalize_roles(body.preferred_roles),
            strict=body.strict,
            pinned=body.pinned,
        )
        with lock:
            service.add_participant(session, participant)
    except TeamMakerError as e:
        raise _error_response(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return participant.to_dict()


@router.patch("/sessions/{session_id}/participants/{participant_id}")
async def update_participant(
    request: Request, session_id: str, participant_id: str, body: UpdateParticipantRequest
):
    service = _get_service(request)
    session, lock = _get_session_with_lock(session_id)
    changes: dict = {}
    if body.name is not None:
        changes["name"] = body.name
    rating = _rating_from(body)
    if rating is not None:
        changes["rating"] = rating
    if body.strict is not None:
        changes["strict"] = body.strict
    if body.pinned is not None:
        changes["pinned"] = body.pinned
    try:
        if body.preferred_roles is not None:
            changes["preferred_roles"] = normalize_roles(body.preferred_roles)
        with lock:
            participant = service.update_participant(session, participant_id, **changes)
    except TeamMakerError as e:
        raise _error_response(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return participant.to_dict()


@router.delete("/sessions/{session_id}/participants/{participant_id}", status_code=204)
async def remove_participant(request: Request, session_id: str, participant_id: str):
    service = _get_service(request)
    session, lock = _get_session_with_lock(session_id)
    try:
        with lock:
            service.remove_participant(session, participant_id)
    except TeamMakerError as e:
        raise _error_response(e)


@router.post("/sessions/{session_id}/teams")
async def build_teams(request: Request, session_id: str):
    """Build teams from the current roster."""
    service = _get_service(request)
    session, lock = _get_session_with_lock(session_id)
    with lock:
        try:
            result = service.build_teams(session)
        except TeamMakerError as e:
            raise _error_response(e)
        return result.to_dict()


@router.post("/sessions/{session_id}/reroll")
async def reroll(request: Request, session_id: str):
    """Rebuild teams so they differ from the current result."""
    service = _get_service(request)
    session, lock = _get_session_with_lock(session_id)
    with lock:
        try:
            result = service.reroll(session)
        except TeamMakerError as e:
            raise _error_response(e)
        return result.to_dict()


@router.post("/sessions/{session_id}/swap")
async def swap(request: Request, session_id: str, body: SwapRequest):
    """Swap the occupants of two slots in the current result."""
    service = _get_service(request)
    session, lock = _get_session_with_lock(session_id)
    with lock:
        try:
            result = service.swap(
                session,
                SlotRef(**body.slot_a.model_dump()),
                SlotRef(**body.slot_b.model_dump()),
            )
        except TeamMakerError as e:
            raise _error_response(e)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return result.to_dict()


@router.post("/sessions/{session_id}/reset")
async def reset(request: Request, session_id: str):
    service = _get_service(request)
    session, lock = _get_session_with_lock(session_id)
    with lock:
        service.reset(session)
        return session.to_dict()
