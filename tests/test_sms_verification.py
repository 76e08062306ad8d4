from datetime import datetime, timedelta, timezone

import pytest

from app.core.cache import MemoryCache
from app.core.exceptions import InvalidOrExpiredCode, RateLimited, ServiceUnavailable, ValidationError
from app.services.rate_limiter import RateLimiter
from app.services.sms_verification_service import SmsVerificationService
from app.services.verification_store import VerificationCodeStore
from tests.fakes import FakeClock, FakeSmsProvider

PHONE = "+14155550123"
IP = "203.0.113.7"


class FailingSmsProvider(FakeSmsProvider):
    async def send(self, to_phone: str, body: str) -> None:
        raise ServiceUnavailable("Failed to send verification code.")


def make_service(provider=None):
    clock = FakeClock()
    cache = MemoryCache(clock=clock)
    provider = provider or FakeSmsProvider()
    service = SmsVerificationService(VerificationCodeStore(cache), RateLimiter(cache), provider)
    return service, cache, clock, provider


@pytest.mark.asyncio
async def test_request_code_sends_and_stores_code():
    service, cache, clock, provider = make_service()

    code = await service.request_code(PHONE, IP)

    assert len(code) == 6 and code.isdigit()
    assert provider.sent == [(PHONE, f"Your verification code is {code}")]
    assert await cache.get(f"sms_code_{PHONE}") == code


@pytest.mark.asyncio
async def test_request_code_rejects_malformed_phone():
    service, cache, clock, provider = make_service()

    with pytest.raises(ValidationError) as exc_info:
        await service.request_code("555-0123", IP)

    assert "phone" in exc_info.value.errors
    assert provider.sent == []


@pytest.mark.asyncio
async def test_sixth_request_within_window_is_rate_limited():
    service, cache, clock, provider = make_service()

    for _ in range(5):
        await service.request_code(PHONE, IP)
        clock.advance(30)
    last_code = await cache.get(f"sms_code_{PHONE}")

    with pytest.raises(RateLimited):
        await service.request_code(PHONE, IP)

    # nothing sent and the stored code is untouched
    assert len(provider.sent) == 5
    assert await cache.get(f"sms_code_{PHONE}") == last_code

    # another client address has its own budget
    await service.request_code(PHONE, "198.51.100.1")


@pytest.mark.asyncio
async def test_rate_limit_resets_after_window():
    service, cache, clock, provider = make_service()

    for _ in range(5):
        await service.request_code(PHONE, IP)
    clock.advance(10 * 60)

    await service.request_code(PHONE, IP)
    assert len(provider.sent) == 6


@pytest.mark.asyncio
async def test_unconfigured_provider_fails_without_state():
    service, cache, clock, provider = make_service(FakeSmsProvider(configured=False))

    with pytest.raises(ServiceUnavailable) as exc_info:
        await service.request_code(PHONE, IP)

    assert exc_info.value.message == "SMS service is not configured."
    assert provider.sent == []
    assert await cache.get(f"sms_code_{PHONE}") is None
    assert await service.limiter.attempts(service.throttle_key(PHONE, IP)) == 0


@pytest.mark.asyncio
async def test_delivery_failure_stores_no_code():
    service, cache, clock, provider = make_service(FailingSmsProvider())

    with pytest.raises(ServiceUnavailable):
        await service.request_code(PHONE, IP)

    assert await cache.get(f"sms_code_{PHONE}") is None


@pytest.mark.asyncio
async def test_verify_code_marks_phone_verified():
    service, cache, clock, provider = make_service()
    code = await service.request_code(PHONE, IP)

    verified_at = await service.verify_code(PHONE, code)

    assert await service.store.get_verified_at(PHONE) == verified_at
    # the code stays until registration consumes it
    assert await cache.get(f"sms_code_{PHONE}") == code


@pytest.mark.asyncio
async def test_verify_code_rejects_wrong_code_without_state_change():
    service, cache, clock, provider = make_service()
    code = await service.request_code(PHONE, IP)
    wrong = "000000" if code != "000000" else "111111"

    with pytest.raises(InvalidOrExpiredCode):
        await service.verify_code(PHONE, wrong)

    assert await cache.get(f"sms_verified_{PHONE}") is None


@pytest.mark.asyncio
async def test_verify_code_rejects_missing_code():
    service, cache, clock, provider = make_service()

    with pytest.raises(InvalidOrExpiredCode):
        await service.verify_code(PHONE, "123456")


@pytest.mark.asyncio
async def test_code_expires_after_ten_minutes():
    service, cache, clock, provider = make_service()
    code = await service.request_code(PHONE, IP)

    clock.advance(10 * 60)

    with pytest.raises(InvalidOrExpiredCode):
        await service.verify_code(PHONE, code)


@pytest.mark.asyncio
async def test_verified_mark_expires_after_thirty_minutes():
    service, cache, clock, provider = make_service()
    code = await service.request_code(PHONE, IP)
    await service.verify_code(PHONE, code)

    clock.advance(29 * 60)
    assert await service.store.get_verified_at(PHONE) is not None
    clock.advance(60)
    assert await service.store.get_verified_at(PHONE) is None


@pytest.mark.asyncio
async def test_only_latest_code_validates():
    service, cache, clock, provider = make_service()

    first = await service.request_code(PHONE, IP)
    clock.advance(1)
    second = await service.request_code(PHONE, IP)

    if first != second:
        with pytest.raises(InvalidOrExpiredCode):
            await service.verify_code(PHONE, first)
    assert await service.verify_code(PHONE, second)


@pytest.mark.asyncio
async def test_verified_at_is_utc_aware():
    service, cache, clock, provider = make_service()
    code = await service.request_code(PHONE, IP)

    verified_at = await service.verify_code(PHONE, code)

    assert verified_at.utcoffset() == timedelta(0)
    assert await cache.get(f"sms_verified_{PHONE}") == verified_at.isoformat()


@pytest.mark.asyncio
async def test_verified_mark_without_offset_reads_as_utc():
    service, cache, clock, provider = make_service()
    await cache.put(f"sms_verified_{PHONE}", "2026-03-01T12:30:00", 1800)

    verified_at = await service.store.get_verified_at(PHONE)

    assert verified_at == datetime(2026, 3, 1, 12, 30, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_non_ascii_code_is_rejected():
    service, cache, clock, provider = make_service()
    await service.request_code(PHONE, IP)

    with pytest.raises(InvalidOrExpiredCode):
        await service.verify_code(PHONE, "١٢٣٤٥٦")
