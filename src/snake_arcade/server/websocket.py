"""WebSocket handlers for real-time play and spectating."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from snake_arcade.controls import Command, map_key, parse_direction
from snake_arcade.server.game_manager import GameManager
from snake_arcade.snake import Direction

logger = logging.getLogger(__name__)

ws_router = APIRouter()

_COMMANDS = {"start", "pause", "reset"}


def _get_manager(ws: WebSocket) -> GameManager:
    return ws.app.state.game_manager


async def _dispatch(manager: GameManager, game_id: str, msg: dict) -> None:
    """Apply one client message; anything unrecognised is ignored."""
    command = msg.get("command")
    if isinstance(command, str) and command.lower() in _COMMANDS:
        command = command.lower()
        if command == "start":
            await manager.start_game(game_id)
        elif command == "pause":
            await manager.toggle_pause(game_id)
        else:
            await manager.reset_game(game_id)
        return

    intent: Direction | Command | None = None
    key = msg.get("key")
    direction = msg.get("direction")
    if isinstance(key, str):
        intent = map_key(key)
    elif isinstance(direction, str):
        intent = parse_direction(direction)

    if intent is Command.PAUSE_TOGGLE:
        await manager.toggle_pause(game_id)
    elif isinstance(intent, Direction):
        await manager.change_direction(game_id, intent)


@ws_router.websocket("/games/{game_id}/play")
async def play(websocket: WebSocket, game_id: str) -> None:
    """Player WebSocket: send keys and commands, receive every snapshot."""
    manager = _get_manager(websocket)
    session = manager.get_game(game_id)
    if session is None:
        await websocket.close(code=4004, reason="Game not found.")
        return

    await websocket.accept()
    session.sockets.append(websocket)
    logger.info("Player connected to game %s.", game_id)

    # Send initial state snapshot so the client gets immediate feedback.
    await websocket.send_text(
        json.dumps(session.engine.get_state(), separators=(",", ":")),
    )

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue
            await _dispatch(manager, game_id, msg)
    except WebSocketDisconnect:
        logger.info("Player disconnected from game %s.", game_id)
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)


@ws_router.websocket("/games/{game_id}/spectate")
async def spectate(websocket: WebSocket, game_id: str) -> None:
    """Spectator WebSocket: receive-only snapshot stream."""
    manager = _get_manager(websocket)
    session = manager.get_game(game_id)
    if session is None:
        await websocket.close(code=4004, reason="Game not found.")
        return

    await websocket.accept()
    session.sockets.append(websocket)
    logger.info("Spectator connected to game %s.", game_id)

    await websocket.send_text(
        json.dumps(session.engine.get_state(), separators=(",", ":")),
    )

    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Spectator disconnected from game %s.", game_id)
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
