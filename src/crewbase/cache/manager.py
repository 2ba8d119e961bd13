# ABOUTME: Keyed cache of last successful fetches with a single staleness threshold
# ABOUTME: Entries are seeded from durable storage at registration and persisted on every put

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import TypeAdapter, ValidationError

from crewbase.cache.storage import CacheStorage
from crewbase.utils.logging import get_logger

Clock = Callable[[], float]

DEFAULT_TTL_SECONDS = 60 * 60


@dataclass(slots=True, frozen=True)
class CacheEntry:
    """Last successfully fetched value of one source."""

    value: Any
    fetched_at: float


@dataclass(slots=True)
class _Slot:
    filename: str
    adapter: TypeAdapter
    entry: CacheEntry | None = None


class CacheManager:
    """Maps source keys to their last good value and the time it was fetched.

    Values are stored wholesale: an entry is either absent or holds exactly
    what the last successful ``put`` stored. The clock and storage backend
    are injected so tests can drive staleness deterministically.
    """

    def __init__(
        self,
        storage: CacheStorage,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Clock = time.time,
    ):
        self.storage = storage
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._slots: dict[str, _Slot] = {}
        self.logger = get_logger(__name__)

    @property
    def keys(self) -> list[str]:
        return list(self._slots)

    def register(self, key: str, value_type: Any, filename: str) -> None:
        """Declare a cache key and seed it from its durable file.

        A value loaded from disk counts as freshly fetched: its age starts at
        zero now, whatever the file's modification time. A file that cannot be
        read or decoded leaves the key empty.
        """
        slot = _Slot(filename=filename, adapter=TypeAdapter(value_type))
        self._slots[key] = slot

        try:
            payload = self.storage.read(filename)
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error("Ignoring unreadable cache file", key=key, filename=filename, error=str(e))
            return
        if payload is None:
            return

        try:
            value = slot.adapter.validate_json(payload)
        except ValidationError as e:
            self.logger.error("Ignoring unreadable cache file", key=key, filename=filename, error=str(e))
            return

        slot.entry = CacheEntry(value=value, fetched_at=self.clock())
        self.logger.info("Loaded cache from disk", key=key, filename=filename)

    def _slot(self, key: str) -> _Slot:
        try:
            return self._slots[key]
        except KeyError:
            raise KeyError(f"Unregistered cache key: {key}") from None

    def get(self, key: str) -> tuple[Any, float] | None:
        """Return ``(value, age_seconds)`` for ``key``, or None if it was never fetched."""
        entry = self._slot(key).entry
        if entry is None:
            return None
        return entry.value, self.clock() - entry.fetched_at

    def put(self, key: str, value: Any) -> None:
        """Replace the entry for ``key`` and overwrite its durable file."""
        slot = self._slot(key)
        slot.entry = CacheEntry(value=value, fetched_at=self.clock())

        payload = slot.adapter.dump_json(value, indent=2, by_alias=True).decode("utf-8")
        try:
            self.storage.write(slot.filename, payload)
        except OSError as e:
            # The in-memory entry still serves until the next restart
            self.logger.error("Failed to persist cache entry", key=key, filename=slot.filename, error=str(e))

    def is_stale(self, age: float) -> bool:
        return age >= self.ttl_seconds

    def is_fresh(self, key: str) -> bool:
        cached = self.get(key)
        return cached is not None and not self.is_stale(cached[1])

    def reset_all(self) -> None:
        """Forget every entry and delete every durable file."""
        for key, slot in self._slots.items():
            slot.entry = None
            try:
                self.storage.delete(slot.filename)
            except OSError as e:
                self.logger.warning("Failed to delete cache file", key=key, filename=slot.filename, error=str(e))
        self.logger.info("Cache reset", keys=self.keys)

    def status(self) -> dict[str, dict[str, Any]]:
        """Describe every registered key: whether it holds a value, its age and staleness."""
        report: dict[str, dict[str, Any]] = {}
        for key, slot in self._slots.items():
            cached = self.get(key)
            if cached is None:
                report[key] = {"cached": False, "age_seconds": None, "stale": True, "file": slot.filename}
                continue
            age = cached[1]
            report[key] = {
                "cached": True,
                "age_seconds": round(age, 1),
                "stale": self.is_stale(age),
                "file": slot.filename,
            }
        return report
