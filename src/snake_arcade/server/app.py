"""FastAPI application factory."""

from __future__ import annotations

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from snake_arcade.config import GameConfig
from snake_arcade.highscore import (
    HighScoreStore,
    JsonFileHighScoreStore,
    MemoryHighScoreStore,
)
from snake_arcade.server.game_manager import GameManager
from snake_arcade.server.routes import router, score_router
from snake_arcade.server.websocket import ws_router

HIGHSCORE_FILE_ENV = "SNAKE_ARCADE_HIGHSCORE_FILE"
CONFIG_FILE_ENV = "SNAKE_ARCADE_CONFIG_FILE"


def default_store() -> HighScoreStore:
    """File-backed store when the env var is set, else in-memory."""
    path = os.getenv(HIGHSCORE_FILE_ENV)
    if path:
        return JsonFileHighScoreStore(path)
    return MemoryHighScoreStore()


def default_config() -> GameConfig:
    path = os.getenv(CONFIG_FILE_ENV)
    if path:
        return GameConfig.load(path)
    return GameConfig()


def create_app(
    store: HighScoreStore | None = None, config: GameConfig | None = None,
) -> FastAPI:
    """Build and return the FastAPI application."""

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.game_manager = GameManager(
            store=store if store is not None else default_store(),
            default_config=config if config is not None else default_config(),
        )
        yield
        await app.state.game_manager.cleanup()

    app = FastAPI(
        title="Snake Arcade API", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(score_router)
    app.include_router(ws_router)
    return app
