from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import datetime
from uuid import UUID, uuid4

from app.core.utils import utcnow

if TYPE_CHECKING:
    from .category import Category

class Species(SQLModel, table=True):
    __tablename__ = "species"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    category_id: UUID = Field(foreign_key="categories.id", index=True)
    title: str
    created_at: datetime = Field(default_factory=utcnow)

    category: Optional["Category"] = Relationship(back_populates="species")
