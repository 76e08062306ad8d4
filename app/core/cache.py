import time
from typing import Callable, Dict, Optional, Tuple

from app.core.config import settings


class CacheStore:
    """
    Expiring key/value store shared by every request. Values are strings,
    ttl is in seconds.
    """

    async def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    async def put(self, key: str, value: str, ttl: int):
        raise NotImplementedError

    async def forget(self, key: str):
        raise NotImplementedError

    async def increment(self, key: str, ttl: int) -> int:
        """Increment a counter, starting its ttl when the key is created."""
        raise NotImplementedError

    async def close(self):
        pass


class MemoryCache(CacheStore):
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}

    def _sweep(self):
        now = self._clock()
        expired = [key for key, (_, expires_at) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]

    async def get(self, key: str) -> Optional[str]:
        self._sweep()
        entry = self._entries.get(key)
        return entry[0] if entry else None

    async def put(self, key: str, value: str, ttl: int):
        self._entries[key] = (value, self._clock() + ttl)

    async def forget(self, key: str):
        self._entries.pop(key, None)

    async def increment(self, key: str, ttl: int) -> int:
        self._sweep()
        entry = self._entries.get(key)
        if entry is None:
            self._entries[key] = ("1", self._clock() + ttl)
            return 1
        count = int(entry[0]) + 1
        self._entries[key] = (str(count), entry[1])
        return count


_cache: Optional[CacheStore] = None


def get_cache() -> CacheStore:
    global _cache
    if _cache is None:
        if settings.CACHE_BACKEND == "memory":
            _cache = MemoryCache()
        else:
            from app.core.redis import RedisCache
            _cache = RedisCache()
    return _cache


async def close_cache():
    global _cache
    if _cache is not None:
        await _cache.close()
        _cache = None
