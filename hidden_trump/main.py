"""FastAPI main application."""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hidden_trump import __version__
from hidden_trump.api.game_handler import GameHandler
from hidden_trump.api.routes import router
from hidden_trump.api.websocket import ConnectionManager
from hidden_trump.config import Settings, settings
from hidden_trump.services.room_registry import RoomRegistry

# Configure logging once for every hidden_trump module
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stdout,
)
logging.getLogger("hidden_trump").setLevel(settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup and shutdown events.

    Rooms live in memory only; on shutdown every pending timer is cancelled.
    """
    logger.info("Hidden Trump server starting")

    yield

    await app.state.connection_manager.shutdown()
    logger.info("Hidden Trump server stopped with %d rooms open", len(app.state.registry))


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the application with its own registry and connection manager."""
    app_settings = app_settings or settings

    app = FastAPI(
        title="Hidden Trump API",
        description="Authoritative server for a four-player hidden-trump card game",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.registry = RoomRegistry(
        code_length=app_settings.room_code_length,
        max_rounds=app_settings.max_rounds,
    )
    app.state.connection_manager = ConnectionManager(
        registry=app.state.registry,
        game_handler=GameHandler(app_settings),
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[app_settings.frontend_url, "http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """API info."""
        return {
            "message": "Hidden Trump API",
            "version": __version__,
            "status": "running",
        }

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


def main() -> None:
    """Run the application."""
    uvicorn.run(
        "hidden_trump.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info",
    )


if __name__ == "__main__":
    main()
