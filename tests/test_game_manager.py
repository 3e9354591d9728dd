"""GameManager scheduling tests: tick loops, pause/resume, concurrency."""

from __future__ import annotations

import asyncio

import pytest

from snake_arcade.config import GameConfig
from snake_arcade.engine import GameStatus
from snake_arcade.highscore import MemoryHighScoreStore
from snake_arcade.server.game_manager import GameManager
from snake_arcade.snake import Direction

FAST = GameConfig(initial_speed=10, min_speed=10)
SLOW = GameConfig(initial_speed=2000)


async def _wait_for(predicate, timeout: float = 5.0) -> bool:
    for _ in range(int(timeout / 0.02)):
        if predicate():
            return True
        await asyncio.sleep(0.02)
    return predicate()


class TestSessions:
    def test_create_and_get(self):
        manager = GameManager()
        session = manager.create_game()
        assert manager.get_game(session.game_id) is session
        assert session.status == GameStatus.WAITING

    def test_default_config_applies(self):
        manager = GameManager(default_config=GameConfig(columns=8, rows=8))
        session = manager.create_game()
        assert session.engine.config.columns == 8

    def test_invalid_max_sessions(self):
        with pytest.raises(ValueError, match="at least 1"):
            GameManager(max_sessions=0)

    def test_idle_sessions_pruned(self):
        manager = GameManager(max_sessions=3)
        first = manager.create_game()
        for _ in range(3):
            manager.create_game()
        assert manager.get_game(first.game_id) is None
        assert len(manager.list_games()) == 3

    @pytest.mark.asyncio
    async def test_new_session_survives_pruning(self):
        manager = GameManager(max_sessions=1)
        running = manager.create_game()
        await manager.start_game(running.game_id)
        fresh = manager.create_game()
        assert manager.get_game(fresh.game_id) is fresh
        await manager.cleanup()

    def test_pruning_ties_fall_back_to_creation_order(self):
        manager = GameManager(max_sessions=2)
        older = manager.create_game()
        newer = manager.create_game()
        older.created_at, newer.created_at = 1.0, 2.0
        older.last_active = newer.last_active = 5.0
        manager.create_game()
        assert manager.get_game(older.game_id) is None
        assert manager.get_game(newer.game_id) is newer

    @pytest.mark.asyncio
    async def test_unknown_game_raises_key_error(self):
        manager = GameManager()
        with pytest.raises(KeyError):
            await manager.start_game("missing")


class TestTickLoop:
    @pytest.mark.asyncio
    async def test_runs_until_wall(self):
        store = MemoryHighScoreStore()
        manager = GameManager(store=store)
        session = manager.create_game(config=FAST, seed=3)
        await manager.start_game(session.game_id)

        assert await _wait_for(lambda: session.status == GameStatus.GAME_OVER)
        assert session.engine.state.snake.head.x == 380
        assert store.get_high_score() == session.engine.state.score
        await manager.cleanup()

    @pytest.mark.asyncio
    async def test_pause_stops_ticking(self):
        manager = GameManager()
        session = manager.create_game(config=FAST, seed=0)
        await manager.start_game(session.game_id)
        await manager.change_direction(session.game_id, Direction.UP)
        await manager.toggle_pause(session.game_id)
        assert session.status == GameStatus.PAUSED

        head = session.engine.state.snake.head
        await asyncio.sleep(0.1)
        assert session.engine.state.snake.head == head

        await manager.toggle_pause(session.game_id)
        assert await _wait_for(
            lambda: session.engine.state.snake.head != head,
        )
        await manager.cleanup()

    @pytest.mark.asyncio
    async def test_single_loop_per_session(self):
        manager = GameManager()
        session = manager.create_game(config=SLOW, seed=0)
        await manager.start_game(session.game_id)
        task = session._task
        await manager.toggle_pause(session.game_id)
        await manager.toggle_pause(session.game_id)
        assert session._task is task
        await manager.cleanup()
        assert task.done()

    @pytest.mark.asyncio
    async def test_restart_after_game_over(self):
        manager = GameManager()
        session = manager.create_game(config=FAST, seed=5)
        await manager.start_game(session.game_id)
        assert await _wait_for(lambda: session.status == GameStatus.GAME_OVER)

        state = await manager.start_game(session.game_id)
        assert state["status"] == "PLAYING"
        assert state["score"] == 0
        assert await _wait_for(lambda: session.status == GameStatus.GAME_OVER)
        await manager.cleanup()

    @pytest.mark.asyncio
    async def test_reset_stops_loop(self):
        manager = GameManager()
        session = manager.create_game(config=FAST, seed=0)
        await manager.start_game(session.game_id)
        await manager.reset_game(session.game_id)
        assert await _wait_for(lambda: session._task.done())
        assert session.status == GameStatus.WAITING
        assert session.engine.state.snake.head == (200, 200)


class TestConcurrentGames:
    @pytest.mark.asyncio
    async def test_20_concurrent_games(self):
        """Spin up 20 games; verify all reach GAME_OVER."""
        manager = GameManager()
        sessions = [manager.create_game(config=FAST, seed=i) for i in range(20)]
        for s in sessions:
            await manager.start_game(s.game_id)

        assert await _wait_for(
            lambda: all(s.status == GameStatus.GAME_OVER for s in sessions),
        )
        await manager.cleanup()
