import logging
from collections import deque
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class RingBufferHandler(logging.Handler):
    """
    Keeps the most recent ``capacity`` log records in memory so the admin UI
    can read them back through ``/api/logs``.
    """

    def __init__(self, capacity: int = 1000, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.capacity = capacity
        self._records: Deque[Dict[str, Any]] = deque(maxlen=capacity)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = {
                "timestamp": datetime.fromtimestamp(
                    record.created, tz=timezone.utc
                ).isoformat(),
                "level": record.levelname.lower(),
                "logger": record.name,
                "message": record.getMessage(),
            }
            if record.exc_info and record.exc_info[1] is not None:
                entry["error"] = repr(record.exc_info[1])
        except Exception:
            self.handleError(record)
            return
        # Handler.handle() already holds self.lock here
        self._records.append(entry)

    def entries(self) -> List[Dict[str, Any]]:
        with self.lock:
            return list(self._records)

    def clear(self) -> None:
        with self.lock:
            self._records.clear()


def setup_logging(level: str = "INFO", buffer_size: int = 1000) -> RingBufferHandler:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)

    root = logging.getLogger()
    # basicConfig is a no-op when a server already installed handlers
    root.setLevel(level.upper())
    for handler in list(root.handlers):
        if isinstance(handler, RingBufferHandler):
            root.removeHandler(handler)

    buffer = RingBufferHandler(capacity=buffer_size)
    root.addHandler(buffer)
    return buffer
