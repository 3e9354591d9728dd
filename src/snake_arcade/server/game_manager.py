"""In-memory session registry, lifecycle commands, and async tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from snake_arcade.config import GameConfig
from snake_arcade.engine import GameEngine, GameStatus
from snake_arcade.highscore import HighScoreStore, MemoryHighScoreStore
from snake_arcade.server.models import GameSummary
from snake_arcade.snake import Direction

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100


@dataclass
class GameSession:
    """All server-side state for a single game."""

    game_id: str
    engine: GameEngine
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    last_active: float = field(default_factory=time.monotonic)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def status(self) -> GameStatus:
        return self.engine.status

    def summary(self) -> GameSummary:
        state = self.engine.state
        return GameSummary(
            game_id=self.game_id,
            status=state.status,
            score=state.score,
            high_score=state.high_score,
            game_speed=state.game_speed,
        )


class GameManager:
    """Central registry managing all game sessions.

    All sessions share one high-score store.
    """

    def __init__(
        self,
        store: HighScoreStore | None = None,
        default_config: GameConfig | None = None,
        max_sessions: int = _MAX_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self.store = store if store is not None else MemoryHighScoreStore()
        self.default_config = (
            default_config if default_config is not None else GameConfig()
        )
        self._sessions: dict[str, GameSession] = {}
        self._max_sessions = max_sessions

    def create_game(
        self, config: GameConfig | None = None, seed: int | None = None,
    ) -> GameSession:
        """Create a new WAITING session and return it."""
        engine = GameEngine(
            config=config if config is not None else self.default_config,
            store=self.store,
            seed=seed,
        )
        game_id = uuid.uuid4().hex[:12]
        session = GameSession(game_id=game_id, engine=engine)
        self._sessions[game_id] = session
        self._prune_idle_sessions(keep=game_id)
        logger.info(
            "Game %s created (%dx%d board).",
            game_id, engine.config.columns, engine.config.rows,
        )
        return session

    def get_game(self, game_id: str) -> GameSession | None:
        return self._sessions.get(game_id)

    def _require(self, game_id: str) -> GameSession:
        session = self._sessions.get(game_id)
        if session is None:
            raise KeyError(f"Game {game_id} not found.")
        return session

    def list_games(self) -> list[GameSummary]:
        return [s.summary() for s in self._sessions.values()]

    def high_score(self) -> int:
        return self.store.get_high_score()

    async def start_game(self, game_id: str) -> dict:
        """Start or restart a game and begin ticking."""
        session = self._require(game_id)
        async with session.lock:
            state = session.engine.start()
        await self._after_command(session, state)
        return state

    async def toggle_pause(self, game_id: str) -> dict:
        session = self._require(game_id)
        async with session.lock:
            state = session.engine.toggle_pause()
        await self._after_command(session, state)
        return state

    async def reset_game(self, game_id: str) -> dict:
        session = self._require(game_id)
        async with session.lock:
            state = session.engine.reset()
        await self._after_command(session, state)
        return state

    async def change_direction(self, game_id: str, direction: Direction) -> dict:
        session = self._require(game_id)
        async with session.lock:
            state = session.engine.set_direction(direction)
        await self._after_command(session, state)
        return state

    async def _after_command(self, session: GameSession, state: dict) -> None:
        session.last_active = time.monotonic()
        self._ensure_ticking(session)
        await self._broadcast(session, state)

    def _ensure_ticking(self, session: GameSession) -> None:
        """Run exactly one tick loop while the session is PLAYING."""
        if session.status != GameStatus.PLAYING:
            return
        if session._task is not None and not session._task.done():
            return
        session._task = asyncio.create_task(self._tick_loop(session))

    async def _tick_loop(self, session: GameSession) -> None:
        """Tick at the current game speed, broadcasting state each tick.

        The interval is re-read after every tick so speed-ups apply to the
        very next wait.
        """
        try:
            while session.status == GameStatus.PLAYING:
                await asyncio.sleep(session.engine.game_speed / 1000.0)
                async with session.lock:
                    if session.status != GameStatus.PLAYING:
                        break
                    state = session.engine.step()
                session.last_active = time.monotonic()
                await self._broadcast(session, state)
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled for game %s.", session.game_id)
        except Exception:
            logger.exception("Tick loop error in game %s.", session.game_id)

    def _prune_idle_sessions(self, keep: str | None = None) -> None:
        """Bound the registry by dropping the oldest idle sessions.

        The session named by *keep* is never dropped. Ties on last activity
        fall back to creation order.
        """
        overflow = len(self._sessions) - self._max_sessions
        if overflow <= 0:
            return
        idle = [
            s for s in self._sessions.values()
            if s.game_id != keep
            and s.status != GameStatus.PLAYING
            and not s.sockets
        ]
        idle.sort(key=lambda s: (s.last_active, s.created_at))
        pruned = idle[:overflow]
        for stale in pruned:
            self._sessions.pop(stale.game_id, None)
        logger.info(
            "Pruned %d idle sessions (retaining up to %d).",
            len(pruned),
            self._max_sessions,
        )

    async def _broadcast(self, session: GameSession, state: dict) -> None:
        """Send a snapshot to every connected socket."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so concurrent disconnect handlers can mutate
        # the live socket list without affecting this send loop.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running tick loops."""
        tasks = [
            s._task for s in self._sessions.values()
            if s._task and not s._task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("GameManager cleanup complete.")
