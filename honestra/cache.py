"""
Summary Cache

In-memory TTL cache for purpose-claim summaries.
Key = SHA-256(text + provider + model). Default TTL = 1 hour.

The firewall is often asked about the same post many times; the cache
keeps those repeats from reaching the text-generation service.
Coroutine-safe via an asyncio lock.
"""

from __future__ import annotations

import asyncio
import hashlib
import time
from collections import OrderedDict
from typing import Optional


class SummaryCache:
    """In-memory LRU cache with TTL expiry."""

    def __init__(self, ttl_seconds: float = 3600, max_entries: int = 1000):
        self._entries: OrderedDict[str, tuple[float, dict]] = OrderedDict()
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0

    @staticmethod
    def make_key(text: str, scope: str = "") -> str:
        return hashlib.sha256(f"{scope}||{text}".encode("utf-8")).hexdigest()

    async def get(self, text: str, scope: str = "") -> Optional[dict]:
        """Return the cached summary, or None if absent or expired."""
        key = self.make_key(text, scope)
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            stored_at, value = entry
            if time.monotonic() - stored_at > self._ttl:
                del self._entries[key]
                self._misses += 1
                return None

            self._entries.move_to_end(key)
            self._hits += 1
            return dict(value)

    async def put(self, text: str, value: dict, scope: str = "") -> None:
        """Store a summary, evicting the least recently used entry when full."""
        key = self.make_key(text, scope)
        async with self._lock:
            self._entries[key] = (time.monotonic(), dict(value))
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    @property
    def stats(self) -> dict:
        total = self._hits + self._misses
        return {
            "entries": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total, 3) if total > 0 else 0.0,
        }


# Singleton, shared across the application
summary_cache = SummaryCache()
