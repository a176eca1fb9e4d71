"""TTL cache store with pluggable storage backends."""

import json
import logging
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol, TypeVar

from site_cms.domain.cache import CacheEntry, CacheStats

_logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^a-z0-9]", re.IGNORECASE)

# Failures raised by a backend or by (de)serializing a record.
_STORAGE_ERRORS = (OSError, ValueError, TypeError, KeyError)

T = TypeVar("T")


class CacheBackend(Protocol):
    """Raw record storage addressed by normalized key."""

    def read(self, name: str) -> str | None:
        """Return the stored record, or None when absent."""

    def write(self, name: str, payload: str) -> None:
        """Store a record, replacing any previous one."""

    def remove(self, name: str) -> None:
        """Remove a record if present."""

    def names(self) -> list[str]:
        """Return the names of all stored records."""

    def size(self, name: str) -> int:
        """Return the stored size of a record in bytes."""


@dataclass
class InMemoryCacheBackend(CacheBackend):
    """Dict-backed storage, used for tests and ephemeral deployments."""

    records: dict[str, str] = field(default_factory=dict)

    def read(self, name: str) -> str | None:
        return self.records.get(name)

    def write(self, name: str, payload: str) -> None:
        self.records[name] = payload

    def remove(self, name: str) -> None:
        self.records.pop(name, None)

    def names(self) -> list[str]:
        return list(self.records)

    def size(self, name: str) -> int:
        return len(self.records.get(name, "").encode("utf-8"))


def normalize_key(key: str) -> str:
    """Map an arbitrary cache key to a storage-safe name."""
    return _UNSAFE_KEY_CHARS.sub("_", key).lower()


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class CacheStore:
    """Key-value cache with per-entry expiry.

    Storage faults never reach callers: reads degrade to misses and writes to
    no-ops, both logged.
    """

    backend: CacheBackend
    clock: Callable[[], datetime] = _utc_now
    enabled: bool = True
    default_ttl_seconds: int = 60

    def get(self, key: str) -> object | None:
        """Return the cached value, or None if missing or expired."""
        name = normalize_key(key)
        try:
            payload = self.backend.read(name)
            if payload is None:
                _logger.debug("Cache miss: %s", key)
                return None
            entry = CacheEntry.from_record(json.loads(payload))
        except _STORAGE_ERRORS:
            _logger.exception("Cache read failed for %s", key)
            return None

        now_ms = self._now_ms()
        if not entry.is_valid(now_ms):
            _logger.debug(
                "Cache expired: %s (age: %ss)",
                key,
                round((now_ms - entry.timestamp_ms) / 1000),
            )
            self.delete(key)
            return None
        _logger.debug("Cache hit: %s", key)
        return entry.data

    def set(self, key: str, data: object, ttl_seconds: int | None = None) -> None:
        """Store a value for `ttl_seconds`, replacing any existing entry."""
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        entry = CacheEntry(data=data, timestamp_ms=self._now_ms(), ttl_ms=ttl * 1000)
        try:
            self.backend.write(normalize_key(key), json.dumps(entry.to_record()))
        except _STORAGE_ERRORS:
            _logger.exception("Cache write failed for %s", key)
            return
        _logger.debug("Cache set: %s (TTL: %ss)", key, ttl)

    def delete(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""
        try:
            self.backend.remove(normalize_key(key))
        except _STORAGE_ERRORS:
            _logger.exception("Cache delete failed for %s", key)

    def delete_pattern(self, pattern: str) -> int:
        """Remove every entry whose normalized key contains `pattern`."""
        needle = normalize_key(pattern)
        removed = 0
        try:
            for name in self.backend.names():
                if needle in name:
                    self.backend.remove(name)
                    removed += 1
        except _STORAGE_ERRORS:
            _logger.exception("Cache pattern delete failed for %s", pattern)
        _logger.debug("Cache deleted %s entries matching %s", removed, pattern)
        return removed

    def clear(self) -> None:
        """Remove all entries."""
        try:
            for name in self.backend.names():
                self.backend.remove(name)
        except _STORAGE_ERRORS:
            _logger.exception("Cache clear failed")
            return
        _logger.info("Cache cleared")

    def get_stats(self) -> CacheStats:
        """Count valid and expired entries without removing anything."""
        try:
            names = self.backend.names()
        except _STORAGE_ERRORS:
            _logger.exception("Cache stats failed")
            return CacheStats()

        now_ms = self._now_ms()
        total_size = 0
        valid = 0
        expired = 0
        for name in names:
            try:
                total_size += self.backend.size(name)
                payload = self.backend.read(name)
                if payload is None:
                    continue
                entry = CacheEntry.from_record(json.loads(payload))
            except _STORAGE_ERRORS:
                continue
            if entry.is_valid(now_ms):
                valid += 1
            else:
                expired += 1
        return CacheStats(
            total_entries=len(names),
            valid_entries=valid,
            expired_entries=expired,
            total_size_bytes=total_size,
        )

    async def with_cache(
        self,
        key: str,
        producer: Callable[[], Awaitable[T]],
        ttl_seconds: int | None = None,
    ) -> T:
        """Return the cached value for `key`, computing it on a miss."""
        if not self.enabled:
            return await producer()

        cached = self.get(key)
        if cached is not None:
            return cached  # type: ignore[return-value]

        result = await producer()
        self.set(key, result, ttl_seconds)
        return result

    def _now_ms(self) -> int:
        return int(self.clock().timestamp() * 1000)
