"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from snake_arcade.config import ServerConfig
from snake_arcade.errors import InvariantViolation
from snake_arcade.leaderboard import Leaderboard
from snake_arcade.server.routes import health_router, leaderboard_router, router
from snake_arcade.server.session_manager import SessionManager

logger = logging.getLogger(__name__)


def _install_state(app: FastAPI, config: ServerConfig) -> None:
    app.state.config = config
    app.state.session_manager = SessionManager(config)
    app.state.leaderboard = Leaderboard(
        capacity=config.leaderboard_capacity,
        default_limit=config.leaderboard_default_limit,
    )


def _mount_static(app: FastAPI, static_dir: str) -> None:
    root = Path(static_dir)
    if not root.is_dir():
        logger.warning("Static directory %s does not exist; not serving it.", root)
        return

    app.mount("/static", StaticFiles(directory=root), name="static")
    index = root / "index.html"

    @app.get("/", include_in_schema=False)
    async def index_page() -> FileResponse:
        return FileResponse(index)

    logger.info("Serving static files from %s", root)


async def _invariant_violation_handler(
    request: Request, exc: InvariantViolation,
) -> JSONResponse:
    logger.error(
        "Invariant violated while handling %s %s: %s",
        request.method, request.url.path, exc,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": str(exc)})


def create_app(config: ServerConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    config = config if config is not None else ServerConfig()

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(
        title="Snake Arcade API", version="0.1.0", lifespan=_lifespan,
    )
    _install_state(app, config)
    app.add_exception_handler(InvariantViolation, _invariant_violation_handler)
    app.include_router(router)
    app.include_router(leaderboard_router)
    app.include_router(health_router)
    if config.static_dir:
        _mount_static(app, config.static_dir)
    return app
