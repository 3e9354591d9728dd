"""Fixed game parameters: board geometry, timing, and scoring."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from snake_arcade.snake import Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Board geometry, speed progression, and scoring constants.

    Coordinates are expressed in board units: every position is a multiple
    of ``cell_size`` and the board spans ``[0, width) x [0, height)``.
    Speeds are tick intervals in milliseconds, so smaller is faster.
    """

    cell_size: int = 20
    columns: int = 20
    rows: int = 20
    initial_speed: int = 150
    speed_increment: int = 10
    min_speed: int = 50
    points_per_food: int = 10
    points_per_speedup: int = 50

    def __post_init__(self) -> None:
        if self.columns < 4 or self.rows < 4:
            raise ValueError("Board dimensions must be at least 4×4 cells.")
        if self.cell_size < 1:
            raise ValueError("cell_size must be at least 1.")
        if self.points_per_food < 1:
            raise ValueError("points_per_food must be at least 1.")
        if self.points_per_speedup < 1:
            raise ValueError("points_per_speedup must be at least 1.")
        if self.speed_increment < 0:
            raise ValueError("speed_increment must be >= 0.")
        if not 0 < self.min_speed <= self.initial_speed:
            raise ValueError("min_speed must be in (0, initial_speed].")

    @property
    def width(self) -> int:
        return self.columns * self.cell_size

    @property
    def height(self) -> int:
        return self.rows * self.cell_size

    @property
    def origin(self) -> Position:
        """Starting cell of the snake's head."""
        return Position(
            self.columns // 2 * self.cell_size,
            self.rows // 2 * self.cell_size,
        )

    @property
    def waiting_food(self) -> Position:
        """Placeholder food shown before a game has started."""
        return Position(
            self.columns // 4 * self.cell_size,
            self.rows // 4 * self.cell_size,
        )

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must hold a JSON object.")
        unknown = sorted(set(raw) - {f.name for f in fields(cls)})
        if unknown:
            raise ValueError(f"Unknown config fields: {', '.join(unknown)}.")
        return cls(**raw)
