from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import or_
from sqlmodel import select

from app.core.exceptions import ValidationError
from app.core.utils import utcnow
from app.db.models import Listing, User, Wishlist

class WishlistService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_listings(self, user: User) -> List[Listing]:
        stmt = (
            select(Listing)
            .join(Wishlist, Wishlist.listing_id == Listing.id)
            .where(Wishlist.user_id == user.id, Wishlist.deleted_at == None)
            .order_by(Wishlist.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def add(self, user: User, listing_id: UUID) -> Wishlist:
        if not await self.session.get(Listing, listing_id):
            raise ValidationError(errors={"listing_id": "The selected listing id is invalid."})

        # Includes soft-deleted rows so a removed entry is restored, not duplicated
        stmt = select(Wishlist).where(Wishlist.user_id == user.id, Wishlist.listing_id == listing_id)
        result = await self.session.execute(stmt)
        wishlist = result.scalars().first()

        if wishlist is None:
            wishlist = Wishlist(user_id=user.id, listing_id=listing_id)
        elif wishlist.trashed:
            wishlist.deleted_at = None
        else:
            return wishlist

        self.session.add(wishlist)
        await self.session.commit()
        await self.session.refresh(wishlist)
        return wishlist

    async def remove(self, user: User, wishlist_or_listing_id: UUID) -> int:
        stmt = select(Wishlist).where(
            Wishlist.user_id == user.id,
            Wishlist.deleted_at == None,
            or_(Wishlist.id == wishlist_or_listing_id, Wishlist.listing_id == wishlist_or_listing_id),
        )
        result = await self.session.execute(stmt)
        entries = result.scalars().all()

        now = utcnow()
        for entry in entries:
            entry.deleted_at = now
            self.session.add(entry)
        await self.session.commit()
        return len(entries)
