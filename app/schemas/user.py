from pydantic import BaseModel
from typing import Optional
from uuid import UUID
from datetime import datetime

class UserBase(BaseModel):
    name: str
    email: str
    phone: str

class UserResponse(UserBase):
    id: UUID
    role: str
    phone_verified_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True
