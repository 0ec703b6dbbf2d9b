"""In-memory session registry with per-session locking and eviction."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field

import numpy as np

from snake_arcade.config import ServerConfig
from snake_arcade.engine import GameEngine
from snake_arcade.errors import RateLimitExceeded, SessionNotFound
from snake_arcade.heuristic import choose_direction
from snake_arcade.snake import Direction

logger = logging.getLogger(__name__)

_RATE_COMPACT_INTERVAL = 60.0  # seconds between stale-key sweeps


@dataclass
class GameSession:
    """A single player's game and the lock serializing access to it."""

    session_id: str
    engine: GameEngine
    created_at: float
    last_active: float
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    @property
    def game_over(self) -> bool:
        return self.engine.game_over


class SessionManager:
    """Central registry mapping session ids to running games.

    Mutations of one session are serialized by that session's own lock;
    sessions never wait on each other. Idle sessions expire after
    ``session_ttl_seconds`` and the registry is capped at ``max_sessions``
    by evicting the least recently used entries.
    """

    def __init__(
        self,
        config: ServerConfig | None = None,
        seed: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config if config is not None else ServerConfig()
        self._sessions: OrderedDict[str, GameSession] = OrderedDict()
        self._seed_seq = np.random.SeedSequence(seed)
        self._clock = clock
        self._rate_limits: dict[str, list[float]] = {}
        self._last_rate_compact: float = 0.0

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    # --- rate limiting ---

    def _check_rate_limit(self, client_ip: str) -> bool:
        """Return True if the client is within rate limits."""
        now = self._clock()
        window = self.config.rate_limit_window_seconds
        timestamps = self._rate_limits.get(client_ip, [])
        timestamps = [t for t in timestamps if now - t < window]
        if timestamps:
            self._rate_limits[client_ip] = timestamps
        else:
            self._rate_limits.pop(client_ip, None)
        self._compact_rate_limits(now)
        return len(timestamps) < self.config.rate_limit_max

    def _compact_rate_limits(self, now: float) -> None:
        """Remove rate-limit entries whose timestamps have all expired."""
        if now - self._last_rate_compact < _RATE_COMPACT_INTERVAL:
            return
        self._last_rate_compact = now
        window = self.config.rate_limit_window_seconds
        stale_ips = [
            ip for ip, ts in self._rate_limits.items()
            if all(now - t >= window for t in ts)
        ]
        for ip in stale_ips:
            del self._rate_limits[ip]
        if stale_ips:
            logger.info(
                "Compacted %d stale rate-limit entries.", len(stale_ips),
            )

    def _record_creation(self, client_ip: str) -> None:
        self._rate_limits.setdefault(client_ip, []).append(self._clock())

    # --- lifecycle ---

    def create_session(self, client_ip: str = "unknown") -> GameSession:
        """Start a new game and register it under a fresh UUID."""
        if not self._check_rate_limit(client_ip):
            logger.warning("Rate limit hit for client %s.", client_ip)
            raise RateLimitExceeded("Rate limit exceeded. Try again later.")

        self.prune_expired()
        self._enforce_capacity(self.config.max_sessions - 1)

        rng = np.random.default_rng(self._seed_seq.spawn(1)[0])
        now = self._clock()
        session = GameSession(
            session_id=str(uuid.uuid4()),
            engine=GameEngine(self.config.game, rng=rng),
            created_at=now,
            last_active=now,
        )
        self._sessions[session.session_id] = session
        self._record_creation(client_ip)
        logger.info("Session %s created.", session.session_id)
        return session

    def get_session(self, session_id: str) -> GameSession:
        """Return the live session for *session_id*.

        Raises :class:`SessionNotFound` for unknown or expired ids.
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        if self._is_expired(session, self._clock()):
            self._evict(session_id, reason="expired")
            raise SessionNotFound(session_id)
        return session

    def remove_session(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFound(session_id)
        logger.info("Session %s removed.", session_id)

    def _touch(self, session: GameSession) -> None:
        session.last_active = self._clock()
        if session.session_id in self._sessions:
            self._sessions.move_to_end(session.session_id)

    def _is_expired(self, session: GameSession, now: float) -> bool:
        ttl = self.config.session_ttl_seconds
        return ttl is not None and now - session.last_active >= ttl

    def _evict(self, session_id: str, reason: str) -> None:
        if self._sessions.pop(session_id, None) is not None:
            logger.info("Session %s evicted (%s).", session_id, reason)

    def prune_expired(self) -> int:
        """Drop sessions idle for longer than the configured TTL."""
        now = self._clock()
        stale = [
            sid for sid, s in self._sessions.items() if self._is_expired(s, now)
        ]
        for sid in stale:
            self._evict(sid, reason="expired")
        return len(stale)

    def _enforce_capacity(self, limit: int) -> None:
        """Evict least recently used sessions until at most *limit* remain."""
        while len(self._sessions) > max(limit, 0):
            sid = next(iter(self._sessions))
            self._evict(sid, reason="capacity")

    # --- game operations ---

    def _ensure_registered(self, session: GameSession) -> None:
        """Raise if *session* was evicted while a caller waited on its lock."""
        if self._sessions.get(session.session_id) is not session:
            raise SessionNotFound(session.session_id)

    async def get_state(self, session_id: str) -> dict:
        session = self.get_session(session_id)
        async with session.lock:
            self._ensure_registered(session)
            return session.engine.get_state()

    async def set_direction(
        self, session_id: str, direction: Direction | None,
    ) -> tuple[bool, Direction]:
        """Buffer a heading; unknown or illegal directions are ignored.

        Returns ``(accepted, buffered_heading)``.
        """
        session = self.get_session(session_id)
        async with session.lock:
            self._ensure_registered(session)
            accepted = (
                direction is not None
                and session.engine.set_direction(direction)
            )
            self._touch(session)
            return accepted, session.engine.direction

    async def tick(self, session_id: str) -> dict:
        """Advance one session by a single step."""
        session = self.get_session(session_id)
        async with session.lock:
            self._ensure_registered(session)
            state = session.engine.step()
            self._touch(session)
            return state

    async def ai_tick(self, session_id: str) -> tuple[Direction, dict]:
        """Let the autopilot steer, then advance one step."""
        session = self.get_session(session_id)
        async with session.lock:
            self._ensure_registered(session)
            engine = session.engine
            direction = choose_direction(engine)
            engine.set_direction(direction)
            state = engine.step()
            self._touch(session)
            return direction, state

    async def cleanup(self) -> None:
        """Drop all sessions and release rate-limit state."""
        self._sessions.clear()
        self._rate_limits.clear()
        logger.info("SessionManager cleanup complete.")
