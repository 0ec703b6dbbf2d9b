"""Exception types raised by the game engine and session registry."""

from __future__ import annotations


class SnakeArcadeError(Exception):
    """Base class for all Snake Arcade errors."""


class SessionNotFound(SnakeArcadeError, KeyError):
    """Raised when a session id is unknown or has been evicted."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session {session_id} not found.")
        self.session_id = session_id

    def __str__(self) -> str:
        return self.args[0]


class RateLimitExceeded(SnakeArcadeError, ValueError):
    """Raised when a client creates sessions faster than allowed."""


class InvariantViolation(SnakeArcadeError, RuntimeError):
    """Raised when the game reaches a state that should be impossible."""
