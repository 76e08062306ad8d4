from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from app.core.utils import utcnow

if TYPE_CHECKING:
    from .listing import Listing

class UserRole(str, Enum):
    ADMIN = "admin"
    CONSUMER = "consumer"

class User(SQLModel, table=True):
    __tablename__ = "users"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    phone: str = Field(unique=True, index=True)
    password_hash: str
    role: str = Field(default=UserRole.CONSUMER.value)
    phone_verified_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)

    listings: List["Listing"] = Relationship(back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
