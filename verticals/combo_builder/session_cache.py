"""Editor session cache.

Mirrors the in-progress Configuration to a persistent key-value slot on every
committed change and rehydrates it on load, merged over the schema defaults.
It is a convenience cache, not a source of truth: a missing or corrupt slot
simply yields the defaults.
"""

import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from verticals.combo_builder.store import CommitHook, Configuration, ConfigStore, merge_with_defaults

logger = logging.getLogger(__name__)

DEFAULT_SLOT = "combo_design_config"


class SessionCache(ABC):
    """Key-value slots holding JSON-serialisable objects."""

    @abstractmethod
    def read(self, slot: str) -> Any | None:
        """Return the stored object, or None if the slot is empty."""

    @abstractmethod
    def write(self, slot: str, value: Any) -> None:
        """Store ``value`` in ``slot``, replacing any previous object."""


class MemorySessionCache(SessionCache):
    def __init__(self):
        self._slots: dict[str, Any] = {}

    def read(self, slot: str) -> Any | None:
        return self._slots.get(slot)

    def write(self, slot: str, value: Any) -> None:
        self._slots[slot] = json.loads(json.dumps(value))


class JsonFileSessionCache(SessionCache):
    """All slots in one JSON file, rewritten atomically on each write."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}

    def read(self, slot: str) -> Any | None:
        return self._read_all().get(slot)

    def write(self, slot: str, value: Any) -> None:
        with self._lock:
            try:
                slots = self._read_all()
            except (OSError, ValueError):
                slots = {}
            slots[slot] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(json.dumps(slots, indent=2), encoding="utf-8")
            os.replace(tmp, self.path)


# ---------------------------------------------------------------------------
# Load / persist
# ---------------------------------------------------------------------------

def load_configuration(cache: SessionCache, slot: str = DEFAULT_SLOT) -> Configuration:
    """Read the cached configuration and merge it over the defaults."""
    try:
        raw = cache.read(slot)
    except (OSError, ValueError):
        logger.warning("Session cache slot %s unreadable, using defaults", slot, exc_info=True)
        return merge_with_defaults(None)
    if not isinstance(raw, dict):
        return merge_with_defaults(None)
    return merge_with_defaults(raw)


def persist_hook(cache: SessionCache, slot: str = DEFAULT_SLOT) -> CommitHook:
    """Commit hook writing every committed Configuration to ``slot``."""

    def _persist(config: Configuration) -> None:
        cache.write(slot, config.to_dict())

    return _persist


def build_store(cache: SessionCache, slot: str = DEFAULT_SLOT) -> ConfigStore:
    """A ConfigStore rehydrated from ``cache`` and mirrored back to it."""
    initial = load_configuration(cache, slot)
    return ConfigStore(initial=initial, on_commit=persist_hook(cache, slot))
