# nowplaying/models/session_model.py
from typing import Optional

from pydantic import BaseModel

from nowplaying.models.token_model import TokenPair


class PlaybackSession(BaseModel):
    """
    Process-wide state, held in one place and passed to every component.

    - tokens:            written by the handshake and the refresher
    - is_authenticated:  set once tokens exist, never reset
    - current_track_id:  written only by the poller, never persisted
    """

    tokens: Optional[TokenPair] = None
    is_authenticated: bool = False
    current_track_id: Optional[str] = None

    def authenticate(self, tokens: TokenPair) -> None:
        self.tokens = tokens
        self.is_authenticated = True
