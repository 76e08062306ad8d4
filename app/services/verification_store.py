import secrets
from datetime import datetime, timezone

from app.core.cache import CacheStore
from app.core.config import settings


def code_cache_key(phone: str) -> str:
    return f"sms_code_{phone}"


def verified_cache_key(phone: str) -> str:
    return f"sms_verified_{phone}"


class VerificationCodeStore:
    """
    One-time codes and verified marks for phone numbers, kept in the shared
    cache under keys other deployments read as well.
    """

    def __init__(self, cache: CacheStore):
        self.cache = cache

    async def put_code(self, phone: str, code: str):
        await self.cache.put(code_cache_key(phone), code, settings.SMS_CODE_TTL_MINUTES * 60)

    async def get_code(self, phone: str) -> str | None:
        return await self.cache.get(code_cache_key(phone))

    async def code_matches(self, phone: str, submitted_code: str) -> bool:
        cached_code = await self.get_code(phone)
        if cached_code is None:
            return False
        return secrets.compare_digest(cached_code.encode(), submitted_code.encode())

    async def mark_verified(self, phone: str, verified_at: datetime):
        await self.cache.put(
            verified_cache_key(phone),
            verified_at.isoformat(),
            settings.SMS_VERIFIED_TTL_MINUTES * 60,
        )

    async def get_verified_at(self, phone: str) -> datetime | None:
        raw = await self.cache.get(verified_cache_key(phone))
        if not raw:
            return None
        verified_at = datetime.fromisoformat(raw)
        # marks written without an offset are UTC
        if verified_at.tzinfo is None:
            verified_at = verified_at.replace(tzinfo=timezone.utc)
        return verified_at

    async def clear(self, phone: str):
        await self.cache.forget(code_cache_key(phone))
        await self.cache.forget(verified_cache_key(phone))
