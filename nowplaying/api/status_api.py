# nowplaying/api/status_api.py
from fastapi import APIRouter, Depends

from nowplaying.api.spotify_auth_api import get_session
from nowplaying.models.session_model import PlaybackSession

router = APIRouter()


@router.get("/")
def root(session: PlaybackSession = Depends(get_session)):
    return {
        "status": "ok",
        "authenticated": session.is_authenticated,
        "current_track_id": session.current_track_id,
    }
