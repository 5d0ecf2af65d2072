from unittest.mock import MagicMock, patch
from urllib.parse import parse_qs, urlparse

import pytest

from nowplaying.services.spotify_oauth import (
    SpotifyAuthError,
    build_authorize_url,
    exchange_code,
    refresh_access_token,
)

POST = "nowplaying.services.spotify_oauth.requests.post"


def _response(status_code=200, payload=None, text=""):
    r = MagicMock()
    r.status_code = status_code
    r.text = text
    r.json.return_value = payload
    return r


def test_authorize_url(settings):
    url = urlparse(build_authorize_url(settings))
    qs = parse_qs(url.query)

    assert f"{url.scheme}://{url.netloc}{url.path}" == "https://accounts.spotify.com/authorize"
    assert qs["client_id"] == ["test-client-id"]
    assert qs["response_type"] == ["code"]
    assert qs["redirect_uri"] == ["http://localhost:8888/callback"]
    assert qs["scope"] == ["user-read-playback-state user-read-currently-playing"]


def test_exchange_code(settings):
    payload = {"access_token": "a", "refresh_token": "r", "expires_in": 3600}
    with patch(POST, return_value=_response(payload=payload)) as post:
        tokens = exchange_code(settings, "the-code")

    assert tokens.access_token == "a"
    assert tokens.refresh_token == "r"
    kwargs = post.call_args.kwargs
    assert kwargs["data"]["grant_type"] == "authorization_code"
    assert kwargs["data"]["code"] == "the-code"
    assert kwargs["auth"] == ("test-client-id", "test-client-secret")


def test_exchange_code_rejected(settings):
    with patch(POST, return_value=_response(status_code=400, text='{"error":"invalid_grant"}')):
        with pytest.raises(SpotifyAuthError):
            exchange_code(settings, "bad")


def test_refresh_keeps_old_refresh_token(settings):
    with patch(POST, return_value=_response(payload={"access_token": "a2", "expires_in": 3600})) as post:
        tokens = refresh_access_token(settings, "r1")

    assert tokens.access_token == "a2"
    assert tokens.refresh_token == "r1"
    assert post.call_args.kwargs["data"] == {"grant_type": "refresh_token", "refresh_token": "r1"}


def test_refresh_adopts_reissued_refresh_token(settings):
    with patch(POST, return_value=_response(payload={"access_token": "a2", "refresh_token": "r2"})):
        tokens = refresh_access_token(settings, "r1")

    assert tokens.refresh_token == "r2"


def test_refresh_without_access_token_fails(settings):
    with patch(POST, return_value=_response(payload={"error": "invalid_client"})):
        with pytest.raises(SpotifyAuthError):
            refresh_access_token(settings, "r1")


def test_non_json_response_fails(settings):
    r = _response(text="<html>")
    r.json.side_effect = ValueError("no json")
    with patch(POST, return_value=r):
        with pytest.raises(SpotifyAuthError):
            refresh_access_token(settings, "r1")
