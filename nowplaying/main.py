# nowplaying/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

# === Import Routers ===
from nowplaying.api.spotify_auth_api import router as spotify_router
from nowplaying.api.status_api import router as status_router
from nowplaying.config.logging_config import configure_logging
from nowplaying.config.settings import Settings, get_settings
from nowplaying.models.session_model import PlaybackSession
from nowplaying.services.scheduler import PlaybackScheduler
from nowplaying.services.token_store import TokenStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, start_scheduler: bool = True) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level, settings.log_format)
        logger.info(f"Server is running on http://localhost:{settings.port}")

        # 1. Tokens from a previous run → already authenticated
        tokens = app.state.token_store.load()
        if tokens is not None:
            app.state.session.authenticate(tokens)

        # 2. Timers
        if start_scheduler:
            app.state.scheduler.start()

        yield

        if start_scheduler:
            await app.state.scheduler.stop()

    app = FastAPI(
        title="Spotify Now Playing → Discord",
        description=(
            "Posts the currently playing Spotify track to a Discord webhook. "
            "Visit /login once to authorize."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    session = PlaybackSession()
    store = TokenStore(settings.token_file)

    app.state.settings = settings
    app.state.session = session
    app.state.token_store = store
    app.state.scheduler = PlaybackScheduler(session, settings, store)

    # === Status ===
    app.include_router(status_router, tags=["Status"])

    # === Spotify OAuth (login / callback / track-info) ===
    app.include_router(spotify_router, tags=["Spotify OAuth"])

    return app


def run() -> None:
    settings = get_settings()
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
