import redis.asyncio as redis
from app.core.config import settings
from app.core.cache import CacheStore

class RedisCache(CacheStore):
    def __init__(self, url: str = None, client: redis.Redis = None):
        self.redis = client or redis.from_url(url or settings.REDIS_URL, encoding="utf-8", decode_responses=True)

    async def get(self, key: str) -> str | None:
        return await self.redis.get(key)

    async def put(self, key: str, value: str, ttl: int):
        await self.redis.set(key, value, ex=ttl)

    async def forget(self, key: str):
        await self.redis.delete(key)

    async def increment(self, key: str, ttl: int) -> int:
        # the window starts with the first hit and is not extended by later ones
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.set(key, 0, ex=ttl, nx=True)
            pipe.incr(key)
            _, count = await pipe.execute()
        return count

    async def close(self):
        await self.redis.close()
