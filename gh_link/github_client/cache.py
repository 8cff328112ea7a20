"""Response cache keyed by request signature."""

import hashlib
import time
from dataclasses import dataclass, field
from typing import Protocol
from urllib.parse import urlencode

from .transport import ApiRequest, ApiResponse


@dataclass
class CacheStats:
    hit: int = 0
    miss: int = 0
    write: int = 0


@dataclass
class CacheEntry:
    """Last response for a signature and when it was fetched."""

    response: ApiResponse
    fetched_at: float = field(default_factory=time.monotonic)

    def is_fresh(self, ttl_seconds: float, now: float | None = None) -> bool:
        now = time.monotonic() if now is None else now
        return now - self.fetched_at < ttl_seconds


class CacheStore(Protocol):
    def get(self, key: str) -> CacheEntry | None: ...

    def set(self, key: str, entry: CacheEntry) -> None: ...

    def clear(self) -> None: ...


class MemoryCacheStore:
    """In-process cache store."""

    def __init__(self) -> None:
        self._data: dict[str, CacheEntry] = {}
        self.stats = CacheStats()

    def get(self, key: str) -> CacheEntry | None:
        entry = self._data.get(key)
        if entry is None:
            self.stats.miss += 1
        else:
            self.stats.hit += 1
        return entry

    def set(self, key: str, entry: CacheEntry) -> None:
        self._data[key] = entry
        self.stats.write += 1

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)


def auth_principal(token: str | None) -> str:
    """Stable identifier of the acting credential that does not expose it."""
    if not token:
        return "anonymous"
    return hashlib.sha256(token.encode("utf-8")).hexdigest()[:16]


def request_signature(request: ApiRequest, token: str | None) -> str:
    """Cache and dedup key: URL, sorted effective query string and principal."""
    query = urlencode(
        sorted((k, str(v)) for k, v in request.params.items() if v is not None)
    )
    return f"GET {request.url}?{query} as {auth_principal(token)}"
