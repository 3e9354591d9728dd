"""Snake Arcade — classic single-player snake game engine."""

from snake_arcade.config import GameConfig
from snake_arcade.engine import GameEngine, GameState, GameStatus
from snake_arcade.food import FoodSpawner
from snake_arcade.highscore import (
    HighScoreStore,
    JsonFileHighScoreStore,
    MemoryHighScoreStore,
)
from snake_arcade.snake import Direction, Position, Snake

__all__ = [
    "Direction",
    "FoodSpawner",
    "GameConfig",
    "GameEngine",
    "GameState",
    "GameStatus",
    "HighScoreStore",
    "JsonFileHighScoreStore",
    "MemoryHighScoreStore",
    "Position",
    "Snake",
]
