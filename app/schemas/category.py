from pydantic import BaseModel, Field
from typing import Optional, List
from uuid import UUID
from datetime import datetime

from app.schemas.listing import ListingResponse, Page

class CategoryBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    image: Optional[str] = None
    icon: Optional[str] = None
    gradient: Optional[str] = None
    is_active: bool = True

class CategoryCreate(CategoryBase):
    slug: Optional[str] = None
    sort_order: Optional[int] = None

class CategoryUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    slug: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    icon: Optional[str] = None
    gradient: Optional[str] = None
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None

class CategoryResponse(CategoryBase):
    id: UUID
    slug: str
    sort_order: int
    created_at: datetime

    class Config:
        from_attributes = True

class CategoryDetailResponse(BaseModel):
    category: CategoryResponse
    listings: Page[ListingResponse]

class SpeciesCreate(BaseModel):
    category_id: UUID
    title: str = Field(..., min_length=1, max_length=255)

class SpeciesResponse(BaseModel):
    id: UUID
    category_id: UUID
    title: str

    class Config:
        from_attributes = True

class HomeResponse(BaseModel):
    categories: List[CategoryResponse]
    listings: List[ListingResponse]
