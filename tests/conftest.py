import pytest

from nowplaying.config.settings import Settings
from nowplaying.models.session_model import PlaybackSession
from nowplaying.models.token_model import TokenPair
from nowplaying.models.track_model import TrackInfo
from nowplaying.services.token_store import TokenStore


@pytest.fixture
def settings(tmp_path):
    return Settings(
        client_id="test-client-id",
        client_secret="test-client-secret",
        redirect_uri="http://localhost:8888/callback",
        webhook_url="https://discord.example/api/webhooks/1/abc",
        token_file=str(tmp_path / "tokens.json"),
        poll_interval=0.01,
        refresh_interval=0.01,
    )


@pytest.fixture
def token_store(settings):
    return TokenStore(settings.token_file)


@pytest.fixture
def tokens():
    return TokenPair(access_token="access-1", refresh_token="refresh-1")


@pytest.fixture
def session(tokens):
    s = PlaybackSession()
    s.authenticate(tokens)
    return s


def make_track(track_id="A", **overrides):
    item = {
        "id": track_id,
        "name": f"Song {track_id}",
        "artists": [{"id": "ar1", "name": "The Band"}, {"id": "ar2", "name": "Guest"}],
        "album": {"id": "al1", "name": "The Album"},
        "duration_ms": 215000,
        "external_urls": {"spotify": f"https://open.spotify.com/track/{track_id}"},
    }
    item.update(overrides)
    return TrackInfo.model_validate(item)


@pytest.fixture
def track_factory():
    return make_track
