from pydantic import BaseModel, Field
from typing import Generic, List, Optional, TypeVar
from uuid import UUID
from datetime import datetime
from decimal import Decimal

from app.db.models.listing import ListingSex, ListingStatus

T = TypeVar("T")

class Page(BaseModel, Generic[T]):
    items: List[T]
    total: int
    page: int
    per_page: int

class ListingBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    category_id: UUID
    species_id: Optional[UUID] = None
    description: str = Field(..., min_length=1, max_length=5000)
    price: Decimal = Field(..., ge=0, le=Decimal("9999999.99"), decimal_places=2)
    location: str = Field(..., min_length=1, max_length=255)
    state: Optional[str] = Field(default=None, max_length=255)
    city: Optional[str] = Field(default=None, max_length=255)
    morph: Optional[str] = Field(default=None, max_length=255)
    age: Optional[str] = Field(default=None, max_length=100)
    sex: ListingSex = ListingSex.UNKNOWN
    is_negotiable: bool = False
    is_delivery_available: bool = False
    images: List[str] = Field(default=[], max_length=10)

class ListingCreate(ListingBase):
    pass

class ListingUpdate(ListingBase):
    images: Optional[List[str]] = Field(default=None, max_length=10)
    status: Optional[ListingStatus] = None

class ListingResponse(BaseModel):
    id: UUID
    user_id: UUID
    category_id: UUID
    species_id: Optional[UUID] = None
    title: str
    slug: str
    description: str
    price: Decimal
    location: str
    state: Optional[str] = None
    city: Optional[str] = None
    morph: Optional[str] = None
    age: Optional[str] = None
    sex: str
    status: str
    images: List[str]
    image_urls: List[str]
    is_negotiable: bool
    is_delivery_available: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class ListingFilters(BaseModel):
    q: Optional[str] = None
    mine: bool = False
    category_id: Optional[str] = None
    location: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    negotiable: bool = False
    delivery: bool = False
    page: int = Field(default=1, ge=1)
