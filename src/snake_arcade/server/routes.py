"""REST API route handlers for game lifecycle management."""

from __future__ import annotations

from dataclasses import replace

from fastapi import APIRouter, HTTPException, Request

from snake_arcade.controls import parse_direction
from snake_arcade.server.game_manager import GameManager
from snake_arcade.server.models import (
    CreateGameRequest,
    DirectionRequest,
    ErrorResponse,
    GameSummary,
    HighScoreResponse,
)

router = APIRouter(prefix="/games", tags=["games"])
score_router = APIRouter(tags=["scores"])

_NOT_FOUND = {404: {"model": ErrorResponse}}


def _get_manager(request: Request) -> GameManager:
    return request.app.state.game_manager


@router.post("", status_code=201, responses={422: {"model": ErrorResponse}})
async def create_game(body: CreateGameRequest, request: Request) -> GameSummary:
    """Create a new game in the WAITING state."""
    manager = _get_manager(request)
    overrides = body.model_dump(exclude_none=True, exclude={"seed"})
    try:
        config = replace(manager.default_config, **overrides)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    session = manager.create_game(config=config, seed=body.seed)
    return session.summary()


@router.get("")
async def list_games(request: Request) -> list[GameSummary]:
    return _get_manager(request).list_games()


@router.get("/{game_id}", responses=_NOT_FOUND)
async def get_game(game_id: str, request: Request) -> dict:
    """Get the game summary plus its full snapshot."""
    session = _get_manager(request).get_game(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Game not found.")
    result = session.summary().model_dump(mode="json")
    result["state"] = session.engine.get_state()
    return result


@router.post("/{game_id}/start", responses=_NOT_FOUND)
async def start_game(game_id: str, request: Request) -> dict:
    """Start a new round (also used for "play again")."""
    try:
        return await _get_manager(request).start_game(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post("/{game_id}/pause", responses=_NOT_FOUND)
async def toggle_pause(game_id: str, request: Request) -> dict:
    """Pause a running game or resume a paused one."""
    try:
        return await _get_manager(request).toggle_pause(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post("/{game_id}/reset", responses=_NOT_FOUND)
async def reset_game(game_id: str, request: Request) -> dict:
    try:
        return await _get_manager(request).reset_game(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post(
    "/{game_id}/direction",
    responses={**_NOT_FOUND, 422: {"model": ErrorResponse}},
)
async def change_direction(
    game_id: str, body: DirectionRequest, request: Request,
) -> dict:
    direction = parse_direction(body.direction)
    if direction is None:
        raise HTTPException(
            status_code=422, detail=f"Unknown direction {body.direction!r}.",
        )
    try:
        return await _get_manager(request).change_direction(game_id, direction)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@score_router.get("/highscore")
async def get_high_score(request: Request) -> HighScoreResponse:
    return HighScoreResponse(high_score=_get_manager(request).high_score())
