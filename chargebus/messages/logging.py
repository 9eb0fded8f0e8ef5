import logging
import threading
from collections import deque
from typing import Deque, Dict, List, Optional


class RingBufferHandler(logging.Handler):
    def __init__(self, max_entries: int = 200):
        super().__init__()
        self.max_entries = max_entries
        self._events: Deque[Dict] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        event = {
            "event": record.getMessage(),
            "level": record.levelname,
            "ts": record.created,
            "details": getattr(record, "details", {}),
        }
        with self._lock:
            self._events.append(event)

    def get_events(self) -> List[Dict]:
        with self._lock:
            return list(self._events)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


def create_logger(name: str, ring_size: int, propagate: bool = True) -> logging.Logger:
    """
    Return the named logger with a ``RingBufferHandler`` attached.

    The ring buffer keeps the most recent events for inspection through
    ``get_ring_buffer``. With ``propagate`` left on, records also reach
    whatever handlers the application configured on parent loggers.
    """
    logger = logging.getLogger(name)
    if any(isinstance(h, RingBufferHandler) for h in logger.handlers):
        return logger
    logger.setLevel(logging.INFO)
    handler = RingBufferHandler(max_entries=ring_size)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = propagate
    return logger


def get_ring_buffer(logger: logging.Logger) -> Optional[RingBufferHandler]:
    for handler in logger.handlers:
        if isinstance(handler, RingBufferHandler):
            return handler
    return None


def redact(details: Optional[dict]) -> dict:
    if not details:
        return {}
    redacted_keys = {
        "password",
        "access_token",
        "refresh_token",
        "shared_access_key",
        "connection_string",
        "authorization",
    }
    cleaned = {}
    for key, value in details.items():
        if key.lower() in redacted_keys:
            cleaned[key] = "***"
        else:
            cleaned[key] = value
    return cleaned
