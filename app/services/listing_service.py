from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import or_
from sqlmodel import delete, func, select

from app.core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from app.core.logger import logger
from app.core.utils import generate_slug, utcnow
from app.db.models import Category, Listing, ListingStatus, Species, User, Wishlist
from app.schemas.listing import ListingCreate, ListingFilters, ListingResponse, ListingUpdate, Page

PER_PAGE = 12

async def paginate(session: AsyncSession, stmt, page: int, per_page: int = PER_PAGE) -> Tuple[list, int]:
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await session.execute(count_stmt)).scalar() or 0
    result = await session.execute(stmt.offset((page - 1) * per_page).limit(per_page))
    return result.scalars().all(), total

def listing_page(items: list, total: int, page: int, per_page: int = PER_PAGE) -> Page[ListingResponse]:
    return Page[ListingResponse](
        items=[ListingResponse.model_validate(item) for item in items],
        total=total,
        page=page,
        per_page=per_page,
    )

class ListingService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_listings(self, filters: ListingFilters, current_user: Optional[User] = None) -> Page[ListingResponse]:
        stmt = select(Listing)

        # Own listings in every status, otherwise only the public marketplace
        if filters.mine and current_user:
            stmt = stmt.where(Listing.user_id == current_user.id)
        else:
            stmt = stmt.where(Listing.status == ListingStatus.ACTIVE.value)

        if filters.q:
            pattern = f"%{filters.q}%"
            stmt = stmt.where(or_(Listing.title.ilike(pattern), Listing.description.ilike(pattern)))

        if filters.category_id and filters.category_id != "all":
            try:
                stmt = stmt.where(Listing.category_id == UUID(filters.category_id))
            except ValueError:
                raise ValidationError(errors={"category_id": "The selected category id is invalid."})

        if filters.location:
            stmt = stmt.where(Listing.location == filters.location)
        if filters.min_price is not None:
            stmt = stmt.where(Listing.price >= filters.min_price)
        if filters.max_price is not None:
            stmt = stmt.where(Listing.price <= filters.max_price)
        if filters.negotiable:
            stmt = stmt.where(Listing.is_negotiable == True)
        if filters.delivery:
            stmt = stmt.where(Listing.is_delivery_available == True)

        stmt = stmt.order_by(Listing.created_at.desc())
        items, total = await paginate(self.session, stmt, filters.page)
        return listing_page(items, total, filters.page)

    async def latest_active(self, limit: int = 6) -> List[Listing]:
        stmt = (
            select(Listing)
            .where(Listing.status == ListingStatus.ACTIVE.value)
            .order_by(Listing.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def _validate_relations(self, category_id: UUID, species_id: Optional[UUID]):
        if not await self.session.get(Category, category_id):
            raise ValidationError(errors={"category_id": "The selected category id is invalid."})
        if species_id and not await self.session.get(Species, species_id):
            raise ValidationError(errors={"species_id": "The selected species id is invalid."})

    async def create_listing(self, data: ListingCreate, user: User) -> Listing:
        await self._validate_relations(data.category_id, data.species_id)

        listing = Listing(
            **data.model_dump(exclude={"sex"}),
            sex=data.sex.value,
            user_id=user.id,
            slug=generate_slug(data.title),
            status=ListingStatus.ACTIVE.value,
        )
        self.session.add(listing)
        await self.session.commit()
        await self.session.refresh(listing)

        logger.info(f"Listing {listing.id} published by user {user.id}")
        return listing

    async def get_listing(self, id_or_slug: str) -> Listing:
        listing = None
        try:
            listing = await self.session.get(Listing, UUID(id_or_slug))
        except ValueError:
            pass
        if listing is None:
            stmt = select(Listing).where(Listing.slug == id_or_slug)
            result = await self.session.execute(stmt)
            listing = result.scalars().first()
        if listing is None:
            raise NotFoundError("Listing not found")
        return listing

    async def _get_owned(self, listing_id: UUID, user: User, action: str) -> Listing:
        listing = await self.session.get(Listing, listing_id)
        if not listing:
            raise NotFoundError("Listing not found")
        if listing.user_id != user.id:
            raise PermissionDeniedError(f"You are not authorized to {action} this listing.")
        return listing

    async def update_listing(self, listing_id: UUID, data: ListingUpdate, user: User) -> Listing:
        listing = await self._get_owned(listing_id, user, "update")
        await self._validate_relations(data.category_id, data.species_id)

        changes = data.model_dump(exclude={"images", "status", "sex"})
        for field, value in changes.items():
            setattr(listing, field, value)
        listing.sex = data.sex.value
        if data.images is not None:
            listing.images = data.images[:10]
        if data.status is not None:
            listing.status = data.status.value
        listing.updated_at = utcnow()

        self.session.add(listing)
        await self.session.commit()
        await self.session.refresh(listing)
        return listing

    async def delete_listing(self, listing_id: UUID, user: User):
        listing = await self._get_owned(listing_id, user, "delete")
        await self.session.execute(delete(Wishlist).where(Wishlist.listing_id == listing.id))
        await self.session.delete(listing)
        await self.session.commit()
        logger.info(f"Listing {listing_id} deleted by user {user.id}")
