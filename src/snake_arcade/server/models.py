"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from snake_arcade.engine import GameStatus


class CreateGameRequest(BaseModel):
    """Request body for POST /games. Omitted fields use the defaults."""

    columns: int | None = Field(default=None, ge=4, le=200)
    rows: int | None = Field(default=None, ge=4, le=200)
    cell_size: int | None = Field(default=None, ge=1)
    initial_speed: int | None = Field(default=None, ge=1, le=2000)
    speed_increment: int | None = Field(default=None, ge=0)
    min_speed: int | None = Field(default=None, ge=1)
    points_per_food: int | None = Field(default=None, ge=1)
    points_per_speedup: int | None = Field(default=None, ge=1)
    seed: int | None = None


class DirectionRequest(BaseModel):
    """Request body for POST /games/{game_id}/direction."""

    direction: str = Field(min_length=1, max_length=16)


class GameSummary(BaseModel):
    """Compact game info for list endpoints."""

    game_id: str
    status: GameStatus
    score: int
    high_score: int
    game_speed: int


class HighScoreResponse(BaseModel):
    high_score: int


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
