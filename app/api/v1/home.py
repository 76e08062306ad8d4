from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_session
from app.schemas.category import CategoryResponse, HomeResponse
from app.schemas.listing import ListingResponse
from app.services.category_service import CategoryService
from app.services.listing_service import ListingService

router = APIRouter()

@router.get("/home", response_model=HomeResponse)
async def home(session: AsyncSession = Depends(get_session)):
    categories = await CategoryService(session).get_active_categories()
    listings = await ListingService(session).latest_active(6)
    return HomeResponse(
        categories=[CategoryResponse.model_validate(c) for c in categories],
        listings=[ListingResponse.model_validate(l) for l in listings],
    )
