# nowplaying/services/notifier.py
import logging
from typing import Optional

import requests
from starlette.concurrency import run_in_threadpool

from nowplaying.models.track_model import TrackInfo
from nowplaying.models.webhook_model import WebhookMessage

logger = logging.getLogger(__name__)

UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_ALBUM = "Unknown Album"
NO_URL = "No URL"


def format_duration(duration_ms: int) -> str:
    """
    ms → "m:ss" (no hour part, 3_600_000 ms is "60:00")
    """
    minutes = duration_ms // 60000
    seconds = (duration_ms % 60000) // 1000
    return f"{minutes}:{seconds:02d}"


def build_message(track: TrackInfo) -> str:
    artist_name = track.artists[0].name if track.artists and track.artists[0].name else UNKNOWN_ARTIST
    album_name = track.album.name if track.album and track.album.name else UNKNOWN_ALBUM
    track_url = track.spotify_url or NO_URL
    duration = format_duration(track.duration_ms or 0)

    return (
        "**Now Playing:**\n\n"
        f"**Track:** {track.name}\n"
        f"**Artist:** {artist_name}\n"
        f"**Album:** {album_name}\n"
        f"**Duration:** {duration}\n"
        f"[Listen on Spotify]({track_url})"
    )


def send_webhook(webhook_url: Optional[str], message: WebhookMessage) -> None:
    if not webhook_url:
        raise ValueError("DISCORD_WEBHOOK_URL is not set")

    r = requests.post(webhook_url, json=message.model_dump())
    r.raise_for_status()


async def notify(track: TrackInfo, webhook_url: Optional[str]) -> None:
    """
    Post the track to Discord.
    Failures are logged and dropped: no retry, nothing raised to the poller.
    """
    try:
        message = WebhookMessage(content=build_message(track))
        await run_in_threadpool(send_webhook, webhook_url, message)
        logger.info("Track info sent to Discord!")
    except Exception as e:
        logger.error(f"Error sending track info to Discord: {e}")
