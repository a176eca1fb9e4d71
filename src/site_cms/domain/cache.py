"""Cache domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheEntry:
    """A cached payload with its creation time and lifetime in milliseconds."""

    data: object
    timestamp_ms: int
    ttl_ms: int

    def is_valid(self, now_ms: int) -> bool:
        """Return True while the entry is within its TTL."""
        return now_ms - self.timestamp_ms <= self.ttl_ms

    def to_record(self) -> dict[str, object]:
        return {"data": self.data, "timestamp": self.timestamp_ms, "ttl": self.ttl_ms}

    @classmethod
    def from_record(cls, record: dict[str, object]) -> "CacheEntry":
        return cls(
            data=record["data"],
            timestamp_ms=int(record["timestamp"]),
            ttl_ms=int(record["ttl"]),
        )


@dataclass(frozen=True)
class CacheStats:
    """Aggregate view of the cache contents."""

    total_entries: int = 0
    valid_entries: int = 0
    expired_entries: int = 0
    total_size_bytes: int = 0

    @property
    def total_size_mb(self) -> str:
        return f"{self.total_size_bytes / 1024 / 1024:.2f}"

    def as_dict(self) -> dict[str, object]:
        return {
            "totalEntries": self.total_entries,
            "validEntries": self.valid_entries,
            "expiredEntries": self.expired_entries,
            "totalSizeBytes": self.total_size_bytes,
            "totalSizeMB": self.total_size_mb,
        }
