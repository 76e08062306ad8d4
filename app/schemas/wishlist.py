from pydantic import BaseModel
from uuid import UUID

class WishlistCreate(BaseModel):
    listing_id: UUID
