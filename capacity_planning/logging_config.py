"""Structured logging configuration for the capacity planning service."""
import json
import logging
import sys
from datetime import datetime, timezone

# `extra=` keys passed by the calculators and copied into JSON records
CONTEXT_FIELDS = ("consultant_id", "months")

TEXT_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, carrying any capacity context passed via `extra`."""

    def format(self, record):
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", json_output: bool = True) -> logging.Handler:
    """
    Route all logging to stdout.

    Called once at API startup or from scripts; importing the package never
    touches the root logger.

    Args:
        level: Root log level name
        json_output: Emit JSON records instead of plain text

    Returns:
        The installed stdout handler
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if json_output else logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers = [handler]

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    return handler
