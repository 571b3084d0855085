"""Lookup result caching."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Cache interface for lookup results."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL in seconds."""


def lookup_key(kind: str, value: str, region: str, language: str | None) -> str:
    """Build a cache key scoped to the FatSecret region and language."""
    return f"fatsecret:{kind}:{region.upper()}:{language or '-'}:{value}"


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


@dataclass
class BoundedTtlCache(Cache):
    """In-process TTL cache that drops the oldest entry once full."""

    max_entries: int = 1024
    _entries: dict[str, _CacheEntry] = field(default_factory=dict, repr=False)

    def get(self, key: str) -> object | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        self._entries.pop(key, None)
        while self._entries and len(self._entries) >= self.max_entries:
            del self._entries[next(iter(self._entries))]
        self._entries[key] = _CacheEntry(
            value=value,
            expires_at=datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds),
        )

    def __len__(self) -> int:
        return len(self._entries)
