"""REST API route handlers for game sessions and the leaderboard."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request

from snake_arcade.errors import RateLimitExceeded, SessionNotFound
from snake_arcade.leaderboard import Leaderboard
from snake_arcade.server.models import (
    AiTickResponse,
    DirectionRequest,
    DirectionResponse,
    HealthResponse,
    LeaderboardEntry,
    ScoreSubmission,
    SessionResponse,
    SubmitScoreResponse,
)
from snake_arcade.server.session_manager import SessionManager
from snake_arcade.snake import Direction

router = APIRouter(prefix="/games", tags=["games"])
leaderboard_router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])
health_router = APIRouter(tags=["health"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _get_leaderboard(request: Request) -> Leaderboard:
    return request.app.state.leaderboard


def _not_found(exc: SessionNotFound) -> HTTPException:
    return HTTPException(status_code=404, detail=str(exc))


@router.post("", status_code=201)
async def new_game(request: Request) -> SessionResponse:
    """Start a new game session."""
    manager = _get_manager(request)
    client_ip = request.client.host if request.client else "unknown"
    try:
        session = manager.create_session(client_ip=client_ip)
    except RateLimitExceeded as exc:
        raise HTTPException(status_code=429, detail=str(exc)) from exc
    return SessionResponse(
        session_id=session.session_id, state=session.engine.get_state(),
    )


@router.get("/{session_id}")
async def get_game(session_id: str, request: Request) -> SessionResponse:
    """Return the current snapshot of a session."""
    try:
        state = await _get_manager(request).get_state(session_id)
    except SessionNotFound as exc:
        raise _not_found(exc) from exc
    return SessionResponse(session_id=session_id, state=state)


@router.post("/{session_id}/direction")
async def set_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> DirectionResponse:
    """Buffer a new heading. Illegal or unknown directions are ignored."""
    direction = Direction.parse(body.direction)
    try:
        accepted, heading = await _get_manager(request).set_direction(
            session_id, direction,
        )
    except SessionNotFound as exc:
        raise _not_found(exc) from exc
    return DirectionResponse(
        session_id=session_id,
        direction=heading.name.lower(),
        accepted=accepted,
    )


@router.post("/{session_id}/tick")
async def tick(session_id: str, request: Request) -> SessionResponse:
    """Advance the game by one step."""
    try:
        state = await _get_manager(request).tick(session_id)
    except SessionNotFound as exc:
        raise _not_found(exc) from exc
    return SessionResponse(session_id=session_id, state=state)


@router.post("/{session_id}/ai-tick")
async def ai_tick(session_id: str, request: Request) -> AiTickResponse:
    """Let the autopilot choose a heading, then advance one step."""
    try:
        direction, state = await _get_manager(request).ai_tick(session_id)
    except SessionNotFound as exc:
        raise _not_found(exc) from exc
    return AiTickResponse(
        session_id=session_id,
        direction=direction.name.lower(),
        state=state,
    )


@leaderboard_router.post("", status_code=201)
async def submit_score(
    body: ScoreSubmission, request: Request,
) -> SubmitScoreResponse:
    """Record a score and return the refreshed top entries."""
    leaderboard = _get_leaderboard(request)
    rank = leaderboard.submit(body.name, body.score)
    return SubmitScoreResponse(
        accepted=True,
        rank=rank,
        leaderboard=[
            LeaderboardEntry(**e.to_dict()) for e in leaderboard.top()
        ],
    )


@leaderboard_router.get("")
async def get_leaderboard(
    request: Request,
    limit: int | None = Query(default=None, ge=1, le=1000),
) -> list[LeaderboardEntry]:
    """Return the top scores, best first."""
    entries = _get_leaderboard(request).top(limit)
    return [LeaderboardEntry(**e.to_dict()) for e in entries]


@health_router.get("/health")
async def health(request: Request) -> HealthResponse:
    return HealthResponse(status="ok", sessions=len(_get_manager(request)))
