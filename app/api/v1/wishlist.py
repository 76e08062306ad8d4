from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from uuid import UUID

from app.api.deps import get_current_user
from app.db.models import User
from app.db.session import get_session
from app.schemas.listing import ListingResponse
from app.schemas.wishlist import WishlistCreate
from app.services.wishlist_service import WishlistService

router = APIRouter()

async def get_wishlist_service(session: AsyncSession = Depends(get_session)) -> WishlistService:
    return WishlistService(session)

@router.get("/", response_model=List[ListingResponse])
async def read_wishlist(
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service)
):
    return await service.get_listings(current_user)

@router.post("/", status_code=status.HTTP_201_CREATED)
async def add_to_wishlist(
    payload: WishlistCreate,
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service)
):
    wishlist = await service.add(current_user, payload.listing_id)
    return {"id": str(wishlist.id), "listing_id": str(wishlist.listing_id)}

@router.delete("/{wishlist_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_from_wishlist(
    wishlist_id: UUID,
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service)
):
    await service.remove(current_user, wishlist_id)
