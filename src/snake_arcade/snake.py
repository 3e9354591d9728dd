"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import NamedTuple


class Position(NamedTuple):
    """A grid-aligned board coordinate."""

    x: int
    y: int

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) unit values.

    Board coordinates grow rightward and downward, so UP decreases ``y``.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    def opposite(self) -> Direction:
        return _OPPOSITES[self]


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def change_direction(current: Direction, requested: Direction) -> Direction:
    """Return *requested* unless it reverses *current*."""
    if _OPPOSITES[current] == requested:
        return current
    return requested


@dataclass(frozen=True)
class Snake:
    """An immutable snake: ordered body segments plus heading.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    body: tuple[Position, ...]
    direction: Direction = Direction.RIGHT

    def __post_init__(self) -> None:
        if not self.body:
            raise ValueError("Snake body must have at least 1 segment.")

    @classmethod
    def spawn(
        cls, origin: Position, direction: Direction = Direction.RIGHT,
    ) -> Snake:
        """Create a single-segment snake at *origin*."""
        return cls(body=(Position(*origin),), direction=direction)

    @property
    def head(self) -> Position:
        """Return the head coordinate."""
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def next_head(self, cell_size: int) -> Position:
        """Compute the next head position without moving."""
        dx, dy = self.direction.value
        x, y = self.head
        return Position(x + dx * cell_size, y + dy * cell_size)

    def turn(self, requested: Direction) -> Snake:
        """Return a snake heading *requested*, ignoring 180° reversals."""
        new_direction = change_direction(self.direction, requested)
        if new_direction == self.direction:
            return self
        return replace(self, direction=new_direction)

    def occupies(self, position: Position) -> bool:
        """Check whether any segment covers *position*."""
        return position in self.body

    def collides_with_body(self, position: Position) -> bool:
        """Check *position* against every segment except the current head.

        The tail is included even though it would move away on a
        non-growing step.
        """
        return position in self.body[1:]

    def move(self, cell_size: int, ate_food: bool = False) -> Snake:
        """Advance one cell; the tail is kept when food was eaten."""
        new_body = (self.next_head(cell_size),) + self.body
        if not ate_food:
            new_body = new_body[:-1]
        return replace(self, body=new_body)

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [seg.to_dict() for seg in self.body],
            "direction": self.direction.name,
        }
