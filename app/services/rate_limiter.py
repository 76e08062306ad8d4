from app.core.cache import CacheStore


class RateLimiter:
    """Fixed-size attempt counters whose window opens with the first hit."""

    def __init__(self, cache: CacheStore):
        self.cache = cache

    @staticmethod
    def _key(key: str) -> str:
        return f"rate_limit:{key}"

    async def attempts(self, key: str) -> int:
        value = await self.cache.get(self._key(key))
        return int(value) if value else 0

    async def too_many_attempts(self, key: str, max_attempts: int) -> bool:
        return await self.attempts(key) >= max_attempts

    async def hit(self, key: str, decay_seconds: int) -> int:
        return await self.cache.increment(self._key(key), decay_seconds)
