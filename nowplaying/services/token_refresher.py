# nowplaying/services/token_refresher.py
import logging

from starlette.concurrency import run_in_threadpool

from nowplaying.config.settings import Settings
from nowplaying.models.session_model import PlaybackSession
from nowplaying.services.spotify_oauth import SpotifyAuthError, refresh_access_token
from nowplaying.services.token_store import TokenStore

logger = logging.getLogger(__name__)


async def refresh_tokens(session: PlaybackSession, settings: Settings, store: TokenStore) -> None:
    """
    One refresh cycle.
    On failure the current tokens stay as they are and the next cycle tries again.
    """
    if session.tokens is None:
        logger.info("No refresh token yet, skipping access token refresh.")
        return

    refresh_token = session.tokens.refresh_token

    try:
        tokens = await run_in_threadpool(refresh_access_token, settings, refresh_token)
    except SpotifyAuthError as e:
        logger.error(f"Error refreshing access token: {e}")
        return

    # A handshake finished while we were waiting; its pair wins
    if session.tokens is None or session.tokens.refresh_token != refresh_token:
        logger.info("Tokens changed during refresh, discarding refreshed access token.")
        return

    session.tokens = tokens

    try:
        store.save(tokens)
    except OSError as e:
        # In-memory token is still good; the file catches up on the next refresh
        logger.error(f"Error saving refreshed tokens: {e}")
        return

    logger.info("Access token refreshed")
