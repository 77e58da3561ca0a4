"""
Root logger configuration driven by settings.log_level / settings.log_format.

'console' gives the timestamped one-liners the scripts use; 'json' writes
one JSON object per line for log shippers.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from songbattle.config import settings

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CONSOLE_DATEFMT = "%H:%M:%S"


class JsonFormatter(logging.Formatter):
    """Render a log record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Install a single stream handler on the root logger."""
    level = (level or settings.log_level).upper()
    fmt = (fmt or settings.log_format).lower()

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
