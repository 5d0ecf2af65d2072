# nowplaying/api/spotify_auth_api.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from starlette.concurrency import run_in_threadpool

from nowplaying.config.settings import Settings
from nowplaying.models.session_model import PlaybackSession
from nowplaying.services.spotify_oauth import SpotifyAuthError, build_authorize_url, exchange_code
from nowplaying.services.token_store import TokenStore

logger = logging.getLogger(__name__)

router = APIRouter()


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_session(request: Request) -> PlaybackSession:
    return request.app.state.session


def get_token_store(request: Request) -> TokenStore:
    return request.app.state.token_store


@router.get(
    "/login",
    summary="Spotify Login",
    description="Redirect to the Spotify authorization page (playback state scopes only).",
)
def login(settings: Settings = Depends(get_settings_dep)):
    return RedirectResponse(url=build_authorize_url(settings), status_code=302)


@router.get(
    "/callback",
    summary="Spotify OAuth Callback",
    description=(
        "Spotify redirects here with ?code=... after the user approves. "
        "The code is exchanged for tokens, which are saved and enable polling."
    ),
)
async def callback(
    code: Optional[str] = Query(None, description="Authorization code from Spotify"),
    settings: Settings = Depends(get_settings_dep),
    session: PlaybackSession = Depends(get_session),
    store: TokenStore = Depends(get_token_store),
):
    if not code:
        return PlainTextResponse("No code provided", status_code=400)

    try:
        tokens = await run_in_threadpool(exchange_code, settings, code)
        store.save(tokens)
    except (SpotifyAuthError, OSError) as e:
        logger.error(f"Error during Spotify authorization: {e}")
        return PlainTextResponse("Error during Spotify authorization", status_code=500)

    session.authenticate(tokens)
    logger.info("Spotify authorization complete, polling enabled.")

    return RedirectResponse(url="/track-info", status_code=302)


@router.get("/track-info", response_class=PlainTextResponse)
def track_info():
    return "Polling for track info. Check the console for updates."
