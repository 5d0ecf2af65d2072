# nowplaying/services/spotify_now_playing.py
from typing import Optional

import requests
from pydantic import ValidationError

from nowplaying.models.track_model import TrackInfo

CURRENTLY_PLAYING_URL = "https://api.spotify.com/v1/me/player/currently-playing"


class SpotifyApiError(Exception):
    """Currently-playing query failed (network, HTTP error, bad payload)."""


def fetch_now_playing(access_token: str) -> Optional[TrackInfo]:
    """
    Call the Spotify Currently Playing API.
    Returns:
    - TrackInfo: something is playing
    - None: nothing playing (204, empty body, no item / no item id)
    Raises SpotifyApiError for everything else, including 401 (token expired).
    """
    headers = {"Authorization": f"Bearer {access_token}"}

    try:
        r = requests.get(CURRENTLY_PLAYING_URL, headers=headers)
    except requests.RequestException as e:
        raise SpotifyApiError(f"request failed: {e}") from e

    # 204 -> No Content
    if r.status_code == 204:
        return None

    if r.status_code == 401:
        raise SpotifyApiError("access token expired or invalid (HTTP 401)")

    if r.status_code >= 400:
        raise SpotifyApiError(f"HTTP {r.status_code}: {r.text}")

    if not r.text:
        return None

    # Spotify may answer with HTML (proxy / rate limit page)
    if not r.headers.get("content-type", "").startswith("application/json"):
        raise SpotifyApiError(f"unexpected content-type: {r.headers.get('content-type')}")

    try:
        data = r.json()
    except ValueError as e:
        raise SpotifyApiError(f"response was not JSON: {e}") from e

    item = data.get("item") if isinstance(data, dict) else None
    if not item:
        return None

    if not isinstance(item, dict):
        raise SpotifyApiError(f"malformed item: {item!r}")

    if not item.get("id"):
        return None

    try:
        return TrackInfo.model_validate(item)
    except ValidationError as e:
        raise SpotifyApiError(f"malformed item: {e}") from e
