# nowplaying/models/track_model.py
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class Artist(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: Optional[str] = None


class Album(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: Optional[str] = None


# Spotify "item" (only the fields we show in the notification)
class TrackInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    artists: List[Artist] = []
    album: Optional[Album] = None
    duration_ms: int = 0
    external_urls: Optional[Dict[str, str]] = None

    @field_validator("duration_ms", mode="before")
    @classmethod
    def _none_duration(cls, v):
        return 0 if v is None else v

    @property
    def spotify_url(self) -> Optional[str]:
        if not self.external_urls:
            return None
        return self.external_urls.get("spotify")
