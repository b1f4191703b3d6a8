"""Pydantic schemas for the Wishlist API."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.deal import DealView, Pagination
from app.schemas.user import CamelModel


class AddToWishlistRequest(CamelModel):
    """Save a deal; alerts require a subscriber token."""
    deal_id: str = Field(..., min_length=1, max_length=36, description="Deal to save")
    alert_enabled: bool = Field(False, description="Enable price-drop alert")


class UpdateWishlistRequest(CamelModel):
    alert_enabled: bool = Field(..., description="New alert preference")


class WishlistEntryResponse(CamelModel):
    """Persisted wishlist row."""
    id: str
    user_id: str
    deal_id: str
    alert_enabled: bool
    created_at: datetime


class WishlistItem(CamelModel):
    """Wishlist row joined with the current deal view (null if the deal is gone)."""
    id: str
    deal_id: str
    alert_enabled: bool
    created_at: datetime
    deal: Optional[DealView] = None


class WishlistListResponse(CamelModel):
    wishlist: list[WishlistItem]
    pagination: Pagination


class WishlistAddResponse(CamelModel):
    wishlist: WishlistEntryResponse
    deal: DealView


class WishlistUpdateResponse(CamelModel):
    wishlist: WishlistEntryResponse


class WishlistCountResponse(CamelModel):
    count: int
