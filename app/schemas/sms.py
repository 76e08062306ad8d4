from datetime import datetime
from pydantic import BaseModel, Field

from app.core.utils import PHONE_REGEX

class SmsSendRequest(BaseModel):
    phone: str = Field(..., pattern=PHONE_REGEX)

class SmsVerifyRequest(BaseModel):
    phone: str = Field(..., pattern=PHONE_REGEX)
    sms_code: str = Field(..., min_length=1)

class SmsSendResponse(BaseModel):
    message: str

class SmsVerifyResponse(BaseModel):
    message: str
    verified_at: datetime
