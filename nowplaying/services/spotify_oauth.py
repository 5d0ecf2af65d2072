# nowplaying/services/spotify_oauth.py
from typing import Dict, Optional
from urllib.parse import urlencode

import requests

from nowplaying.config.settings import Settings
from nowplaying.models.token_model import TokenPair

SPOTIFY_AUTHORIZE_URL = "https://accounts.spotify.com/authorize"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"

# Only what the poller needs
SCOPES = ["user-read-playback-state", "user-read-currently-playing"]


class SpotifyAuthError(Exception):
    """Token endpoint rejected the request or could not be reached."""


def build_authorize_url(settings: Settings) -> str:
    params = {
        "client_id": settings.client_id or "",
        "response_type": "code",
        "redirect_uri": settings.redirect_uri or "",
        "scope": " ".join(SCOPES),
    }
    return f"{SPOTIFY_AUTHORIZE_URL}?{urlencode(params)}"


def _post_token(settings: Settings, payload: Dict[str, str]) -> Dict:
    try:
        r = requests.post(
            SPOTIFY_TOKEN_URL,
            data=payload,
            auth=(settings.client_id or "", settings.client_secret or ""),
        )
    except requests.RequestException as e:
        raise SpotifyAuthError(f"Spotify token request failed: {e}") from e

    if r.status_code >= 400:
        raise SpotifyAuthError(f"Spotify token request failed (HTTP {r.status_code}): {r.text}")

    try:
        token_data = r.json()
    except ValueError as e:
        raise SpotifyAuthError(f"Spotify token response was not JSON: {r.text}") from e

    if not isinstance(token_data, dict) or not token_data.get("access_token"):
        raise SpotifyAuthError(f"Spotify token response has no access_token: {token_data}")

    return token_data


def exchange_code(settings: Settings, code: str) -> TokenPair:
    """
    Authorization code → first access/refresh token pair.
    """
    token_data = _post_token(
        settings,
        {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": settings.redirect_uri or "",
        },
    )

    if not token_data.get("refresh_token"):
        raise SpotifyAuthError("Spotify token response has no refresh_token")

    return TokenPair(
        access_token=token_data["access_token"],
        refresh_token=token_data["refresh_token"],
    )


def refresh_access_token(settings: Settings, refresh_token: str) -> TokenPair:
    """
    Trade the refresh token for a new access token.
    Spotify sometimes does not send a new refresh token; keep the old one then.
    """
    token_data = _post_token(
        settings,
        {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
        },
    )

    new_refresh: Optional[str] = token_data.get("refresh_token")
    return TokenPair(
        access_token=token_data["access_token"],
        refresh_token=new_refresh or refresh_token,
    )
