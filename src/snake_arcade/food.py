"""Food placement by rejection sampling."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from snake_arcade.board import is_full
from snake_arcade.snake import Position

if TYPE_CHECKING:
    from snake_arcade.config import GameConfig
    from snake_arcade.snake import Snake

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Places food uniformly at random on cells the snake does not cover.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    """

    def __init__(
        self,
        config: GameConfig,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng()

    def spawn(self, snake: Snake) -> Position | None:
        """Return a free cell, or ``None`` when the board is full.

        Candidates are drawn over the whole board and resampled while they
        land on the snake.
        """
        if is_full(snake, self.config):
            logger.warning("No free cell left for food placement.")
            return None

        cell = self.config.cell_size
        while True:
            col = int(self.rng.integers(self.config.columns))
            row = int(self.rng.integers(self.config.rows))
            candidate = Position(col * cell, row * cell)
            if not snake.occupies(candidate):
                return candidate
