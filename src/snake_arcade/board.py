"""Board geometry helpers and the renderer-facing occupancy grid."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from snake_arcade.config import GameConfig
    from snake_arcade.snake import Position, Snake


class CellType(enum.IntEnum):
    """Integer codes stored in the occupancy grid."""

    EMPTY = 0
    SNAKE = 1
    HEAD = 2
    FOOD = 3


def in_bounds(position: Position, config: GameConfig) -> bool:
    """Check whether a coordinate lies within ``[0, width) x [0, height)``."""
    x, y = position
    return 0 <= x < config.width and 0 <= y < config.height


def cell_count(config: GameConfig) -> int:
    return config.columns * config.rows


def is_full(snake: Snake, config: GameConfig) -> bool:
    """True when the snake covers every cell of the board."""
    return len(set(snake.body)) >= cell_count(config)


def occupancy_grid(
    snake: Snake, food: Position | None, config: GameConfig,
) -> np.ndarray:
    """Rasterize the snake and food into a ``(rows, columns)`` int8 array.

    Indexing follows NumPy's ``[row, col]`` order, i.e. ``[y // cell,
    x // cell]``. Segments outside the board are skipped.
    """
    cells = np.zeros((config.rows, config.columns), dtype=np.int8)
    if food is not None and in_bounds(food, config):
        cells[food.y // config.cell_size, food.x // config.cell_size] = (
            CellType.FOOD
        )
    for seg in reversed(snake.body):
        if in_bounds(seg, config):
            cells[seg.y // config.cell_size, seg.x // config.cell_size] = (
                CellType.SNAKE
            )
    head = snake.head
    if in_bounds(head, config):
        cells[head.y // config.cell_size, head.x // config.cell_size] = (
            CellType.HEAD
        )
    return cells
