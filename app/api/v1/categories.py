from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from uuid import UUID

from app.api.deps import get_current_admin
from app.db.models import User
from app.db.session import get_session
from app.schemas.category import (
    CategoryCreate,
    CategoryDetailResponse,
    CategoryResponse,
    CategoryUpdate,
    SpeciesCreate,
    SpeciesResponse,
)
from app.services.category_service import CategoryService

router = APIRouter()
species_router = APIRouter()

async def get_category_service(session: AsyncSession = Depends(get_session)) -> CategoryService:
    return CategoryService(session)

@router.get("/", response_model=List[CategoryResponse])
async def read_categories(service: CategoryService = Depends(get_category_service)):
    return await service.get_active_categories()

@router.post("/", response_model=CategoryResponse, status_code=201)
async def create_category(
    payload: CategoryCreate,
    admin: User = Depends(get_current_admin),
    service: CategoryService = Depends(get_category_service)
):
    return await service.create_category(payload)

@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: UUID,
    payload: CategoryUpdate,
    admin: User = Depends(get_current_admin),
    service: CategoryService = Depends(get_category_service)
):
    return await service.update_category(category_id, payload)

@router.get("/{slug}", response_model=CategoryDetailResponse)
async def read_category(
    slug: str,
    page: int = Query(default=1, ge=1),
    service: CategoryService = Depends(get_category_service)
):
    return await service.get_category_listings(slug, page)

@router.get("/{slug}/species", response_model=List[SpeciesResponse])
async def read_category_species(slug: str, service: CategoryService = Depends(get_category_service)):
    return await service.get_species(slug)

@species_router.post("/", response_model=SpeciesResponse, status_code=201)
async def create_species(
    payload: SpeciesCreate,
    admin: User = Depends(get_current_admin),
    service: CategoryService = Depends(get_category_service)
):
    return await service.create_species(payload)
