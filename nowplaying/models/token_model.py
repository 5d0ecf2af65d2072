# nowplaying/models/token_model.py
from pydantic import BaseModel


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
