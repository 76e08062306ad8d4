import httpx

from app.core.config import settings
from app.core.exceptions import ServiceUnavailable
from app.core.logger import logger, mask_phone


class SmsProvider:
    def is_configured(self) -> bool:
        raise NotImplementedError

    async def send(self, to_phone: str, body: str) -> None:
        raise NotImplementedError


class TwilioSmsProvider(SmsProvider):
    """Sends text messages through the Twilio Messages REST API."""

    def __init__(
        self,
        account_sid: str | None = None,
        auth_token: str | None = None,
        from_number: str | None = None,
        api_base: str | None = None,
        timeout: float | None = None,
    ):
        self.account_sid = account_sid if account_sid is not None else settings.TWILIO_ACCOUNT_SID
        self.auth_token = auth_token if auth_token is not None else settings.TWILIO_AUTH_TOKEN
        self.from_number = from_number if from_number is not None else settings.TWILIO_FROM_NUMBER
        self.api_base = api_base or settings.TWILIO_API_BASE
        self.timeout = timeout or settings.TWILIO_TIMEOUT_SECONDS

    def is_configured(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.from_number)

    async def send(self, to_phone: str, body: str) -> None:
        url = f"{self.api_base}/Accounts/{self.account_sid}/Messages.json"
        data = {"From": self.from_number, "To": to_phone, "Body": body}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, data=data, auth=(self.account_sid, self.auth_token))
        except httpx.HTTPError as e:
            logger.error(f"Twilio request failed for {mask_phone(to_phone)}: {e}")
            raise ServiceUnavailable("Failed to send verification code.") from e

        if response.status_code not in (200, 201):
            logger.error(
                f"Twilio API error for {mask_phone(to_phone)}: "
                f"{response.status_code} - {response.text}"
            )
            raise ServiceUnavailable("Failed to send verification code.")

        logger.info(f"SMS sent to {mask_phone(to_phone)}: SID={response.json().get('sid')}")


def get_sms_provider() -> SmsProvider:
    return TwilioSmsProvider()
