from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from uuid import UUID, uuid4

from app.core.utils import utcnow

if TYPE_CHECKING:
    from .listing import Listing
    from .species import Species

class Category(SQLModel, table=True):
    __tablename__ = "categories"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str
    slug: str = Field(unique=True, index=True)
    description: Optional[str] = None
    image: Optional[str] = None
    icon: Optional[str] = None
    gradient: Optional[str] = None
    sort_order: int = Field(default=0)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    listings: List["Listing"] = Relationship(back_populates="category")
    species: List["Species"] = Relationship(back_populates="category")
