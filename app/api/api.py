from fastapi import APIRouter
from app.api.v1 import auth, users, categories, listings, wishlist, home

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(home.router, tags=["home"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(categories.species_router, prefix="/species", tags=["categories"])
api_router.include_router(listings.router, prefix="/listings", tags=["listings"])
api_router.include_router(wishlist.router, prefix="/wishlist", tags=["wishlist"])
