from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from app.config import Settings
from routes.game_ws import router as game_ws_router
from routes.games import router as games_router
from services.coordinator import GameCoordinator

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    coordinator = GameCoordinator(
        slot_colors=settings.slot_colors,
        ball_count=settings.ball_count,
        broadcast_interval=settings.broadcast_interval,
        outbox_size=settings.outbox_size,
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        coordinator.start()
        try:
            yield
        finally:
            await coordinator.stop()

    app = FastAPI(title="Ballgame API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.coordinator = coordinator
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def index() -> FileResponse:
        if not os.path.isfile(settings.index_html):
            raise HTTPException(status_code=404, detail="Page not found")
        return FileResponse(settings.index_html, media_type="text/html")

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(games_router, prefix="/api")
    app.include_router(game_ws_router)
    logger.info(
        "[main] App ready: players=%d colors=%s interval=%dms",
        settings.max_players,
        ",".join(settings.slot_colors),
        settings.broadcast_interval_ms,
    )
    return app


app = create_app()
