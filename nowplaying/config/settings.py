# nowplaying/config/settings.py
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


def load_env():
    if os.getenv("ENVIRONMENT") == "production":
        return

    base_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    env_path = os.path.join(base_dir, ".env")

    if os.path.exists(env_path):
        load_dotenv(env_path)


class Settings(BaseModel):
    # Spotify
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect_uri: Optional[str] = None

    # Discord
    webhook_url: Optional[str] = None

    # Token file
    token_file: str = "tokens.json"

    # Timers (seconds)
    poll_interval: float = 10
    refresh_interval: float = 45 * 60

    # Server
    host: str = "0.0.0.0"
    port: int = 8888

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"


def get_settings() -> Settings:
    """
    Read configuration from the environment (after .env has been loaded).
    Missing credentials are not validated here; the first upstream call fails instead.
    """
    load_env()

    return Settings(
        client_id=os.getenv("SPOTIPY_CLIENT_ID"),
        client_secret=os.getenv("SPOTIPY_CLIENT_SECRET"),
        redirect_uri=os.getenv("SPOTIPY_REDIRECT_URI"),
        webhook_url=os.getenv("DISCORD_WEBHOOK_URL"),
        token_file=os.getenv("TOKEN_FILE", "tokens.json"),
        poll_interval=float(os.getenv("POLL_INTERVAL_SECONDS", "10")),
        refresh_interval=float(os.getenv("REFRESH_INTERVAL_SECONDS", str(45 * 60))),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8888")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_format=os.getenv("LOG_FORMAT", "json"),
    )
