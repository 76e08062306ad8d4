from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import JSON, Column
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4

from app.core.utils import utcnow

if TYPE_CHECKING:
    from .user import User
    from .category import Category

class ListingStatus(str, Enum):
    ACTIVE = "active"
    SOLD = "sold"
    PENDING = "pending"
    DRAFT = "draft"

class ListingSex(str, Enum):
    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"

class Listing(SQLModel, table=True):
    __tablename__ = "listings"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    category_id: UUID = Field(foreign_key="categories.id", index=True)
    species_id: Optional[UUID] = Field(default=None, foreign_key="species.id")
    title: str
    slug: str = Field(unique=True, index=True)
    description: str
    price: Decimal = Field(max_digits=10, decimal_places=2)
    location: str
    state: Optional[str] = None
    city: Optional[str] = None
    morph: Optional[str] = None
    age: Optional[str] = None
    sex: str = Field(default=ListingSex.UNKNOWN.value)
    images: List[str] = Field(default=[], sa_column=Column(JSON))
    status: str = Field(default=ListingStatus.ACTIVE.value, index=True)
    is_negotiable: bool = Field(default=False)
    is_delivery_available: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    user: Optional["User"] = Relationship(back_populates="listings")
    category: Optional["Category"] = Relationship(back_populates="listings")

    @property
    def image_urls(self) -> List[str]:
        return [f"/storage/listings/{self.id}/{image}" for image in self.images or []]
