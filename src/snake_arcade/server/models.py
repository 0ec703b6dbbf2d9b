"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Point(BaseModel):
    x: int
    y: int


class SessionState(BaseModel):
    """Snapshot of one game as returned by the engine."""

    snake: list[Point]
    food: Point
    score: int
    game_over: bool
    direction: str
    tick: int
    width: int
    height: int


class SessionResponse(BaseModel):
    """Response carrying a session id and its current snapshot."""

    session_id: str
    state: SessionState


class DirectionRequest(BaseModel):
    """Request body for POST /games/{session_id}/direction.

    The value is matched case-insensitively; anything unrecognized is
    ignored rather than rejected.
    """

    direction: str = Field(default="", max_length=16)


class DirectionResponse(BaseModel):
    session_id: str
    direction: str
    accepted: bool


class AiTickResponse(SessionResponse):
    """Tick response that also reports the autopilot's chosen heading."""

    direction: str


class ScoreSubmission(BaseModel):
    """Request body for POST /leaderboard."""

    name: str = Field(min_length=1, max_length=32)
    score: int


class LeaderboardEntry(BaseModel):
    name: str
    score: int


class SubmitScoreResponse(BaseModel):
    accepted: bool
    rank: int | None
    leaderboard: list[LeaderboardEntry]


class HealthResponse(BaseModel):
    status: str
    sessions: int


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
