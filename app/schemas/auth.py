from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional

from app.core.utils import PHONE_REGEX
from app.schemas.user import UserResponse

class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., pattern=PHONE_REGEX)
    password: str = Field(..., min_length=8)
    password_confirmation: Optional[str] = None
    sms_code: str = Field(..., min_length=1)

    @field_validator("password_confirmation")
    @classmethod
    def check_password_confirmation(cls, value, info):
        if value is not None and value != info.data.get("password"):
            raise ValueError("The password confirmation does not match.")
        return value

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class LoginResponse(BaseModel):
    access_token: str
    token_type: str
    user: UserResponse
