from sqlmodel import SQLModel
from .user import User, UserRole
from .category import Category
from .species import Species
from .listing import Listing, ListingStatus, ListingSex
from .wishlist import Wishlist

__all__ = [
    "SQLModel",
    "User",
    "UserRole",
    "Category",
    "Species",
    "Listing",
    "ListingStatus",
    "ListingSex",
    "Wishlist",
]
