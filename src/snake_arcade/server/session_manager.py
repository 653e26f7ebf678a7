"""In-memory session registry, lifecycle management, and async frame loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from snake_arcade.config import GameConfig
from snake_arcade.engine import Game
from snake_arcade.server.models import SessionStatus, SessionSummary

logger = logging.getLogger(__name__)

# Simple rate limit: max sessions created per IP within the window.
_RATE_LIMIT_WINDOW = 60.0  # seconds
_RATE_LIMIT_MAX = 10
_RATE_COMPACT_INTERVAL = 60.0  # seconds between stale-key sweeps
_MAX_FINISHED_SESSIONS = 100


@dataclass
class Session:
    """A hosted game plus the sockets feeding and watching it."""

    session_id: str
    game: Game
    frame_rate: int
    status: SessionStatus = SessionStatus.WAITING
    held_keys: frozenset[str] = frozenset()
    controllers: list[WebSocket] = field(default_factory=list)
    spectators: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def tick_interval_ms(self) -> int:
        return round(self.game.config.tick_interval * 1000)

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            status=self.status,
            frame_rate=self.frame_rate,
            tick_interval_ms=self.tick_interval_ms,
            score=self.game.score,
        )


class SessionManager:
    """Central registry managing all hosted sessions."""

    def __init__(
        self, max_finished_sessions: int = _MAX_FINISHED_SESSIONS,
    ) -> None:
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        self._sessions: dict[str, Session] = {}
        self._rate_limits: dict[str, list[float]] = {}
        self._last_rate_compact: float = 0.0
        self._max_finished_sessions = max_finished_sessions

    def _check_rate_limit(self, client_ip: str) -> bool:
        """Return True if the client is within rate limits."""
        now = time.monotonic()
        timestamps = self._rate_limits.get(client_ip, [])
        timestamps = [t for t in timestamps if now - t < _RATE_LIMIT_WINDOW]
        if timestamps:
            self._rate_limits[client_ip] = timestamps
        else:
            self._rate_limits.pop(client_ip, None)
        self._compact_rate_limits(now)
        return len(timestamps) < _RATE_LIMIT_MAX

    def _compact_rate_limits(self, now: float) -> None:
        """Remove rate-limit entries whose timestamps have all expired."""
        if now - self._last_rate_compact < _RATE_COMPACT_INTERVAL:
            return
        self._last_rate_compact = now
        stale_ips = [
            ip for ip, ts in self._rate_limits.items()
            if all(now - t >= _RATE_LIMIT_WINDOW for t in ts)
        ]
        for ip in stale_ips:
            del self._rate_limits[ip]
        if stale_ips:
            logger.info(
                "Compacted %d stale rate-limit entries.", len(stale_ips),
            )

    def create_session(
        self,
        arena_width: int = 20,
        arena_height: int = 20,
        bounds: str = "exclusive",
        tick_interval_ms: int = 125,
        food_interval_ms: int = 1000,
        max_food: int = 5,
        growth_per_food: int = 1,
        frame_rate: int = 60,
        seed: int | None = None,
        client_ip: str = "unknown",
    ) -> Session:
        """Create a new waiting session and return it."""
        if not self._check_rate_limit(client_ip):
            raise ValueError("Rate limit exceeded. Try again later.")
        if frame_rate < 1:
            raise ValueError("frame_rate must be at least 1.")

        config = GameConfig.centered(
            arena_width,
            arena_height,
            bounds=bounds,
            tick_interval=tick_interval_ms / 1000.0,
            food_interval=food_interval_ms / 1000.0,
            max_food=max_food,
            growth_per_food=growth_per_food,
            seed=seed,
        )

        session_id = uuid.uuid4().hex[:12]
        session = Session(
            session_id=session_id,
            game=Game(config),
            frame_rate=frame_rate,
        )
        self._sessions[session_id] = session
        self._rate_limits.setdefault(client_ip, []).append(time.monotonic())
        logger.info(
            "Session %s created (%dx%d, %s bounds).",
            session_id, arena_width, arena_height, bounds,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        """Return summaries of non-finished sessions."""
        return [
            s.summary() for s in self._sessions.values()
            if s.status != SessionStatus.FINISHED
        ]

    def start_session(self, session_id: str) -> None:
        """Start the frame loop for a waiting session."""
        session = self._require(session_id)
        if session.status != SessionStatus.WAITING:
            raise ValueError("Session is not in waiting state.")
        session.status = SessionStatus.ACTIVE
        session._task = asyncio.create_task(self._frame_loop(session))
        logger.info(
            "Session %s started at %d fps.", session_id, session.frame_rate,
        )

    async def stop_session(self, session_id: str) -> None:
        """Stop an active session's frame loop and close its sockets."""
        session = self._require(session_id)
        if session.status != SessionStatus.ACTIVE:
            raise ValueError("Session is not active.")
        self._mark_finished(session)
        task = session._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        await self._close_connections(session)
        self._prune_finished_sessions()

    def set_keys(self, session: Session, keys: list[str]) -> None:
        """Replace the held-key set sampled by the next frame."""
        session.held_keys = frozenset(k.lower() for k in keys)

    def _require(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    async def _frame_loop(self, session: Session) -> None:
        """Drive the game one frame at a time, broadcasting after ticks."""
        frame_interval = 1.0 / session.frame_rate
        last = time.monotonic()
        try:
            while session.status == SessionStatus.ACTIVE:
                await asyncio.sleep(frame_interval)
                now = time.monotonic()
                dt, last = now - last, now
                async with session.lock:
                    report = session.game.update(dt, session.held_keys)
                    state = (
                        session.game.get_state() if report is not None else None
                    )
                if state is not None:
                    await self._broadcast(session, state)
        except asyncio.CancelledError:
            logger.info("Frame loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Frame loop error in session %s.", session.session_id)
            self._mark_finished(session)
        finally:
            if session.status == SessionStatus.FINISHED:
                await self._close_connections(session)
                self._prune_finished_sessions()

    def _mark_finished(self, session: Session) -> None:
        """Transition a session to finished exactly once."""
        if session.status != SessionStatus.FINISHED:
            session.status = SessionStatus.FINISHED
            session.finished_at = time.monotonic()

    async def _close_connections(self, session: Session) -> None:
        """Close every live socket of a finished session."""
        sockets = [*session.controllers, *session.spectators]
        session.controllers.clear()
        session.spectators.clear()
        for ws in sockets:
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session finished.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )

    def _prune_finished_sessions(self) -> None:
        """Bound retained finished sessions to avoid unbounded growth."""
        finished = [
            s for s in self._sessions.values()
            if s.status == SessionStatus.FINISHED
        ]
        overflow = len(finished) - self._max_finished_sessions
        if overflow <= 0:
            return

        finished.sort(
            key=lambda s: s.finished_at if s.finished_at is not None else s.created_at,
        )
        for stale in finished[:overflow]:
            self._sessions.pop(stale.session_id, None)
        logger.info(
            "Pruned %d finished sessions (retaining up to %d).",
            overflow,
            self._max_finished_sessions,
        )

    async def _broadcast(self, session: Session, state: dict) -> None:
        """Send game state to all connected controllers and spectators."""
        payload = json.dumps(state, separators=(",", ":"))
        for sockets in (session.controllers, session.spectators):
            dead: list[WebSocket] = []
            # Iterate over a snapshot so disconnect handlers can mutate
            # the live list without affecting this send loop.
            for ws in list(sockets):
                try:
                    if ws.client_state == WebSocketState.CONNECTED:
                        await ws.send_text(payload)
                except Exception:
                    dead.append(ws)
            for ws in dead:
                if ws in sockets:
                    sockets.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running frame loops and release rate-limit state."""
        tasks = [
            s._task for s in self._sessions.values()
            if s._task and not s._task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._rate_limits.clear()
        logger.info("SessionManager cleanup complete.")
