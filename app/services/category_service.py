from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import func, select

from app.core.exceptions import NotFoundError, ValidationError
from app.core.utils import slugify, utcnow
from app.db.models import Category, Listing, ListingStatus, Species
from app.schemas.category import CategoryCreate, CategoryUpdate, CategoryDetailResponse, CategoryResponse, SpeciesCreate
from app.services.listing_service import listing_page, paginate

class CategoryService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_active_categories(self) -> List[Category]:
        stmt = select(Category).where(Category.is_active == True).order_by(Category.sort_order)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def get_by_slug(self, slug: str) -> Category:
        stmt = select(Category).where(Category.slug == slug)
        result = await self.session.execute(stmt)
        category = result.scalars().first()
        if not category:
            raise NotFoundError("Category not found")
        return category

    async def get_category_listings(self, slug: str, page: int = 1) -> CategoryDetailResponse:
        category = await self.get_by_slug(slug)
        stmt = (
            select(Listing)
            .where(Listing.category_id == category.id, Listing.status == ListingStatus.ACTIVE.value)
            .order_by(Listing.created_at.desc())
        )
        items, total = await paginate(self.session, stmt, page)
        return CategoryDetailResponse(
            category=CategoryResponse.model_validate(category),
            listings=listing_page(items, total, page),
        )

    async def _ensure_slug_free(self, slug: str, exclude_id: UUID | None = None):
        stmt = select(Category).where(Category.slug == slug)
        if exclude_id:
            stmt = stmt.where(Category.id != exclude_id)
        result = await self.session.execute(stmt)
        if result.scalars().first():
            raise ValidationError(errors={"slug": "The slug has already been taken."})

    async def create_category(self, data: CategoryCreate) -> Category:
        category = Category(**data.model_dump(exclude={"slug", "sort_order"}))
        category.slug = data.slug or slugify(data.title)
        await self._ensure_slug_free(category.slug)

        if data.sort_order:
            category.sort_order = data.sort_order
        else:
            result = await self.session.execute(select(func.max(Category.sort_order)))
            category.sort_order = (result.scalar() or 0) + 1

        self.session.add(category)
        await self.session.commit()
        await self.session.refresh(category)
        return category

    async def update_category(self, category_id: UUID, data: CategoryUpdate) -> Category:
        category = await self.session.get(Category, category_id)
        if not category:
            raise NotFoundError("Category not found")

        changes = data.model_dump(exclude_unset=True)
        title_changed = "title" in changes and changes["title"] != category.title
        if title_changed and not changes.get("slug"):
            changes["slug"] = slugify(changes["title"])
        if changes.get("slug") and changes["slug"] != category.slug:
            await self._ensure_slug_free(changes["slug"], exclude_id=category.id)

        for field, value in changes.items():
            if value is not None:
                setattr(category, field, value)
        category.updated_at = utcnow()

        self.session.add(category)
        await self.session.commit()
        await self.session.refresh(category)
        return category

    async def get_species(self, slug: str) -> List[Species]:
        category = await self.get_by_slug(slug)
        stmt = select(Species).where(Species.category_id == category.id).order_by(Species.title)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def create_species(self, data: SpeciesCreate) -> Species:
        if not await self.session.get(Category, data.category_id):
            raise ValidationError(errors={"category_id": "The selected category id is invalid."})
        species = Species(**data.model_dump())
        self.session.add(species)
        await self.session.commit()
        await self.session.refresh(species)
        return species
