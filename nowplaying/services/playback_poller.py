# nowplaying/services/playback_poller.py
import logging
from typing import Awaitable, Callable

from starlette.concurrency import run_in_threadpool

from nowplaying.models.session_model import PlaybackSession
from nowplaying.models.track_model import TrackInfo
from nowplaying.services.spotify_now_playing import SpotifyApiError, fetch_now_playing

logger = logging.getLogger(__name__)

Notify = Callable[[TrackInfo], Awaitable[None]]


async def poll(session: PlaybackSession, notify: Notify) -> None:
    """
    One poll cycle:
    1. not logged in        → skip
    2. nothing playing      → log, keep current_track_id
    3. same track as before → nothing
    4. new track            → remember it, then notify
    """
    if not session.is_authenticated or session.tokens is None:
        logger.info("User is not authenticated.")
        return

    try:
        track = await run_in_threadpool(fetch_now_playing, session.tokens.access_token)
    except SpotifyApiError as e:
        logger.error(f"Error fetching track info: {e}")
        return

    if track is None:
        logger.info("No track is currently playing.")
        return

    if track.id == session.current_track_id:
        return

    session.current_track_id = track.id
    logger.info(f"Track changed: {track.id} ({track.name})")
    await notify(track)
