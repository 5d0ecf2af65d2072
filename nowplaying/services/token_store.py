# nowplaying/services/token_store.py
import json
import logging
import os
import tempfile
from typing import Optional

from pydantic import ValidationError

from nowplaying.models.token_model import TokenPair

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_FILE = "tokens.json"


class TokenStore:
    """
    Keeps the access/refresh token pair in a single JSON file:
        {"access_token": "...", "refresh_token": "..."}
    """

    def __init__(self, path: str = DEFAULT_TOKEN_FILE):
        self.path = path

    def load(self) -> Optional[TokenPair]:
        """
        Read the token file.
        Missing / unreadable / malformed file → None (treated as "not logged in yet").
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            tokens = TokenPair.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            logger.info(f"No token file found or invalid tokens. ({e})")
            return None

        # Both tokens must actually be present
        if not tokens.access_token or not tokens.refresh_token:
            logger.info("No token file found or invalid tokens.")
            return None

        logger.info("Tokens loaded from file.")
        return tokens

    def save(self, tokens: TokenPair) -> None:
        """
        Overwrite the whole file atomically (temp file + rename).
        Raises OSError if the file cannot be written.
        """
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".tokens-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(tokens.model_dump(), f)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

        logger.info("Tokens saved to file.")
