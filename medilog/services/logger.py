import json
import logging
import sys
from datetime import datetime

from medilog.core.config import settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int = logging.INFO, stream=sys.stdout) -> None:
    """
    Configure the root logger once at startup.
    Calling it again is a no-op so Uvicorn reloads don't stack handlers.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    handler = logging.StreamHandler(stream=stream)
    handler.setFormatter(logging.Formatter(_FORMAT, _DATE_FORMAT))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if settings.MEDILOG_DEBUG_MODE else level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_debug(event: str, data: dict):
    """
    Logs structured debug info if enabled.
    """
    if not settings.MEDILOG_DEBUG_MODE:
        return

    entry = {
        "timestamp": datetime.now().isoformat(),
        "event": event,
        "data": data,
    }
    logging.getLogger("medilog.debug").debug(json.dumps(entry, indent=2, default=str))
