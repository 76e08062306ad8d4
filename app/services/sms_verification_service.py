from datetime import datetime

from app.core.config import settings
from app.core.exceptions import InvalidOrExpiredCode, RateLimited, ServiceUnavailable, ValidationError
from app.core.logger import logger, mask_phone
from app.core.utils import generate_verification_code, is_valid_phone, utcnow
from app.services.rate_limiter import RateLimiter
from app.services.sms_provider import SmsProvider
from app.services.verification_store import VerificationCodeStore


class SmsVerificationService:
    def __init__(self, store: VerificationCodeStore, limiter: RateLimiter, provider: SmsProvider):
        self.store = store
        self.limiter = limiter
        self.provider = provider

    @staticmethod
    def throttle_key(phone: str, client_ip: str) -> str:
        return f"{phone.lower()}|{client_ip}"

    async def request_code(self, phone: str, client_ip: str) -> str:
        if not is_valid_phone(phone):
            raise ValidationError(errors={"phone": "The phone format is invalid."})

        throttle_key = self.throttle_key(phone, client_ip)
        if await self.limiter.too_many_attempts(throttle_key, settings.SMS_SEND_MAX_ATTEMPTS):
            logger.warning(f"SMS send rate limited for {mask_phone(phone)} from {client_ip}")
            raise RateLimited()

        if not self.provider.is_configured():
            logger.error("SMS provider credentials are not configured")
            raise ServiceUnavailable("SMS service is not configured.")

        await self.limiter.hit(throttle_key, settings.SMS_SEND_DECAY_MINUTES * 60)

        code = generate_verification_code()
        await self.provider.send(phone, f"Your verification code is {code}")
        await self.store.put_code(phone, code)

        logger.info(f"Verification code sent to {mask_phone(phone)}")
        return code

    async def verify_code(self, phone: str, submitted_code: str) -> datetime:
        if not await self.store.code_matches(phone, submitted_code):
            logger.info(f"Invalid or expired code submitted for {mask_phone(phone)}")
            raise InvalidOrExpiredCode()

        verified_at = utcnow()
        await self.store.mark_verified(phone, verified_at)
        return verified_at
