"""Receiver log: append-only JSON-lines file for posted payloads.

Each accepted payload is written as one line: the payload's own keys plus a
``timestamp`` (ISO-8601, UTC). A payload key named ``timestamp`` is
overwritten.
"""

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class ReceiverLog:
    """Appends JSON entries to ``<directory>/<filename>``."""

    def __init__(self, directory: str | Path = "logs", filename: str = "receiver.log"):
        self.directory = Path(directory)
        self.path = self.directory / filename
        self._lock = threading.Lock()

    def append(self, payload: dict[str, Any], now: datetime | None = None) -> dict[str, Any]:
        """Write one entry and return it. Raises OSError / TypeError on failure."""
        if not isinstance(payload, dict):
            raise TypeError(f"Receiver payload must be a JSON object, got {type(payload).__name__}")
        stamp = (now or datetime.now(timezone.utc)).isoformat()
        entry = {**payload, "timestamp": stamp}
        line = json.dumps(entry) + "\n"

        with self._lock:
            self.directory.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(line)
        logger.info("Receiver entry written to %s", self.path)
        return entry

    def read_entries(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        with self.path.open(encoding="utf-8") as fh:
            return [json.loads(line) for line in fh if line.strip()]
