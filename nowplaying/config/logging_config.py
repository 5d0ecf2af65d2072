# nowplaying/config/logging_config.py
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict


class JsonFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    """
    Send every log record to stdout through a single handler.
    Swallowed errors from the poller / refresher / notifier all end up here.
    """
    root = logging.getLogger()

    # Replace any handler we installed before (uvicorn reload, tests)
    for handler in list(root.handlers):
        if getattr(handler, "_nowplaying", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler._nowplaying = True
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root.addHandler(handler)
    root.setLevel(level.upper())
