from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Annotated, Optional
from uuid import UUID

from app.api.deps import get_current_user, get_optional_user
from app.db.models import User
from app.db.session import get_session
from app.schemas.listing import ListingCreate, ListingFilters, ListingResponse, ListingUpdate, Page
from app.services.listing_service import ListingService

router = APIRouter()

async def get_listing_service(session: AsyncSession = Depends(get_session)) -> ListingService:
    return ListingService(session)

@router.get("/", response_model=Page[ListingResponse])
async def read_listings(
    filters: Annotated[ListingFilters, Query()],
    current_user: Optional[User] = Depends(get_optional_user),
    service: ListingService = Depends(get_listing_service)
):
    return await service.list_listings(filters, current_user)

@router.post("/", response_model=ListingResponse, status_code=status.HTTP_201_CREATED)
async def create_listing(
    payload: ListingCreate,
    current_user: User = Depends(get_current_user),
    service: ListingService = Depends(get_listing_service)
):
    return await service.create_listing(payload, current_user)

@router.get("/{id_or_slug}", response_model=ListingResponse)
async def read_listing(id_or_slug: str, service: ListingService = Depends(get_listing_service)):
    return await service.get_listing(id_or_slug)

@router.put("/{listing_id}", response_model=ListingResponse)
@router.patch("/{listing_id}", response_model=ListingResponse)
async def update_listing(
    listing_id: UUID,
    payload: ListingUpdate,
    current_user: User = Depends(get_current_user),
    service: ListingService = Depends(get_listing_service)
):
    return await service.update_listing(listing_id, payload, current_user)

@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_listing(
    listing_id: UUID,
    current_user: User = Depends(get_current_user),
    service: ListingService = Depends(get_listing_service)
):
    await service.delete_listing(listing_id, current_user)
