"""Keyboard identifiers to game intents."""

from __future__ import annotations

import enum

from snake_arcade.snake import Direction


class Command(enum.Enum):
    """Non-directional intents."""

    PAUSE_TOGGLE = "pause_toggle"


KEY_BINDINGS: dict[str, Direction | Command] = {
    "ArrowUp": Direction.UP,
    "KeyW": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "KeyS": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "KeyA": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "KeyD": Direction.RIGHT,
    "Space": Command.PAUSE_TOGGLE,
}

_DIRECTION_MAP: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


def parse_direction(name: str) -> Direction | None:
    """Look up a direction by name, case-insensitively."""
    return _DIRECTION_MAP.get(name.strip().lower())


def map_key(key: str) -> Direction | Command | None:
    """Translate a key code (``"ArrowUp"``, ``"KeyW"``, ``"Space"``) or a
    plain direction name into an intent. Unmapped keys give ``None``.
    """
    intent = KEY_BINDINGS.get(key)
    if intent is not None:
        return intent
    return parse_direction(key)
