"""TTL cache used by the nutrient lookup."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value for ttl_seconds."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


class InMemoryCache(Cache):
    """Process-local cache; entries are dropped lazily on read."""

    def __init__(self) -> None:
        self._entries: dict[str, _CacheEntry] = {}

    def get(self, key: str) -> object | None:
        """Return the value for key unless it has expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value with an expiry ttl_seconds from now."""
        self._entries[key] = _CacheEntry(
            value=value,
            expires_at=datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds),
        )

    def __len__(self) -> int:
        return len(self._entries)
