from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import UniqueConstraint
from typing import Optional, TYPE_CHECKING
from datetime import datetime
from uuid import UUID, uuid4

from app.core.utils import utcnow

if TYPE_CHECKING:
    from .listing import Listing

class Wishlist(SQLModel, table=True):
    __tablename__ = "wishlists"
    __table_args__ = (UniqueConstraint("user_id", "listing_id"),)
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    listing_id: UUID = Field(foreign_key="listings.id", index=True)
    created_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = None

    listing: Optional["Listing"] = Relationship()

    @property
    def trashed(self) -> bool:
        return self.deleted_at is not None
