"""Tick-based game engine composing snake, food, and scoring rules.

The transition functions below are pure: each takes a :class:`GameState`
and returns a new one, never mutating its input. :class:`GameEngine` wraps
them with the configuration, RNG, and high-score store a host needs.
"""

from __future__ import annotations

import enum
import logging
import threading
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

import numpy as np

from snake_arcade.board import in_bounds, occupancy_grid
from snake_arcade.config import GameConfig
from snake_arcade.food import FoodSpawner
from snake_arcade.highscore import MemoryHighScoreStore
from snake_arcade.snake import Direction, Position, Snake

if TYPE_CHECKING:
    from snake_arcade.highscore import HighScoreStore

logger = logging.getLogger(__name__)


class GameStatus(str, enum.Enum):
    """Top-level lifecycle of a game."""

    WAITING = "WAITING"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    GAME_OVER = "GAME_OVER"


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of everything a renderer needs.

    ``food`` is ``None`` only once the snake has filled the board.
    ``game_speed`` is the interval in milliseconds before the next tick.
    """

    snake: Snake
    food: Position | None
    score: int
    high_score: int
    status: GameStatus
    game_speed: int

    def to_dict(self) -> dict:
        return {
            "snake": self.snake.to_dict(),
            "food": self.food.to_dict() if self.food is not None else None,
            "score": self.score,
            "high_score": self.high_score,
            "status": self.status.value,
            "game_speed": self.game_speed,
        }


def calculate_game_speed(score: int, config: GameConfig) -> int:
    """Tick interval for *score*: one step faster per speed-up threshold."""
    boosts = score // config.points_per_speedup
    return max(
        config.min_speed,
        config.initial_speed - boosts * config.speed_increment,
    )


def initial_state(
    config: GameConfig,
    high_score: int = 0,
    status: GameStatus = GameStatus.WAITING,
) -> GameState:
    """The pre-game layout: one segment at the origin heading right."""
    return GameState(
        snake=Snake.spawn(config.origin, Direction.RIGHT),
        food=config.waiting_food,
        score=0,
        high_score=high_score,
        status=status,
        game_speed=config.initial_speed,
    )


def start(
    state: GameState,
    config: GameConfig,
    spawner: FoodSpawner,
    store: HighScoreStore,
) -> GameState:
    """Begin a fresh game, reloading the high score from *store*.

    Only WAITING and GAME_OVER games can be started; a running or paused
    game is returned unchanged.
    """
    if state.status in (GameStatus.PLAYING, GameStatus.PAUSED):
        return state
    snake = Snake.spawn(config.origin, Direction.RIGHT)
    return GameState(
        snake=snake,
        food=spawner.spawn(snake),
        score=0,
        high_score=store.get_high_score(),
        status=GameStatus.PLAYING,
        game_speed=config.initial_speed,
    )


def apply_direction_intent(state: GameState, requested: Direction) -> GameState:
    """Queue a heading for the next tick; reversals are ignored."""
    if state.status != GameStatus.PLAYING:
        return state
    snake = state.snake.turn(requested)
    if snake is state.snake:
        return state
    return replace(state, snake=snake)


def toggle_pause(state: GameState) -> GameState:
    if state.status == GameStatus.PLAYING:
        return replace(state, status=GameStatus.PAUSED)
    if state.status == GameStatus.PAUSED:
        return replace(state, status=GameStatus.PLAYING)
    return state


def reset(state: GameState, config: GameConfig) -> GameState:
    """Back to WAITING, carrying over the in-memory high score."""
    return initial_state(config, high_score=state.high_score)


def is_wall_collision(position: Position, config: GameConfig) -> bool:
    return not in_bounds(position, config)


def _end_game(state: GameState, store: HighScoreStore) -> GameState:
    store.save_high_score(state.score)
    return replace(
        state,
        status=GameStatus.GAME_OVER,
        high_score=max(state.high_score, state.score),
    )


def tick(
    state: GameState,
    config: GameConfig,
    spawner: FoodSpawner,
    store: HighScoreStore,
) -> GameState:
    """Advance the game by one cell.

    Collisions are checked against the pre-move body before anything
    changes; a collision ends the game and leaves snake and food as-is.
    """
    if state.status != GameStatus.PLAYING:
        return state

    snake = state.snake
    next_head = snake.next_head(config.cell_size)

    if is_wall_collision(next_head, config) or snake.collides_with_body(next_head):
        logger.info(
            "Snake crashed at (%d, %d) with score %d.",
            next_head.x, next_head.y, state.score,
        )
        return _end_game(state, store)

    ate_food = next_head == state.food
    snake = snake.move(config.cell_size, ate_food=ate_food)
    if not ate_food:
        return replace(state, snake=snake)

    score = state.score + config.points_per_food
    food = spawner.spawn(snake)
    grown = replace(
        state,
        snake=snake,
        food=food,
        score=score,
        game_speed=calculate_game_speed(score, config),
    )
    if food is None:
        logger.info("Board cleared with score %d.", score)
        return _end_game(grown, store)
    return grown


class GameEngine:
    """Single-snake engine holding the current state between calls.

    Every public method runs under one lock, so direction intents and
    ticks arriving from different threads are applied one after another.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: HighScoreStore | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.rng = np.random.default_rng(seed)
        self.spawner = FoodSpawner(self.config, rng=self.rng)
        self._lock = threading.Lock()
        self._state = initial_state(
            self.config, high_score=self.store.get_high_score(),
        )

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def status(self) -> GameStatus:
        return self._state.status

    @property
    def game_speed(self) -> int:
        return self._state.game_speed

    def start(self) -> dict:
        """Start a new round from WAITING or GAME_OVER; return the snapshot."""
        with self._lock:
            previous = self._state
            self._state = start(previous, self.config, self.spawner, self.store)
            if self._state is not previous:
                logger.info(
                    "Game started (high score %d).", self._state.high_score,
                )
            return self._snapshot()

    def set_direction(self, direction: Direction) -> dict:
        with self._lock:
            self._state = apply_direction_intent(self._state, direction)
            return self._snapshot()

    def toggle_pause(self) -> dict:
        with self._lock:
            self._state = toggle_pause(self._state)
            return self._snapshot()

    def reset(self) -> dict:
        with self._lock:
            self._state = reset(self._state, self.config)
            return self._snapshot()

    def step(self) -> dict:
        """Advance the game by one tick and return the snapshot."""
        with self._lock:
            self._state = tick(self._state, self.config, self.spawner, self.store)
            return self._snapshot()

    def get_state(self) -> dict:
        """Return the full, serializable game snapshot."""
        with self._lock:
            return self._snapshot()

    def _snapshot(self) -> dict:
        state = self._state
        snapshot = state.to_dict()
        snapshot["board"] = {
            "cell_size": self.config.cell_size,
            "columns": self.config.columns,
            "rows": self.config.rows,
            "width": self.config.width,
            "height": self.config.height,
            "cells": occupancy_grid(state.snake, state.food, self.config).tolist(),
        }
        return snapshot
