"""
Wishlist API endpoints.
Every route requires a bearer token; enabling alerts additionally requires
the subscriber flag carried in that token.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import PageParams, require_identity
from app.core.database import get_db
from app.schemas.deal import Pagination
from app.schemas.wishlist import (
    AddToWishlistRequest,
    UpdateWishlistRequest,
    WishlistAddResponse,
    WishlistCountResponse,
    WishlistEntryResponse,
    WishlistItem,
    WishlistListResponse,
    WishlistUpdateResponse,
)
from app.services.token_service import TokenIdentity
from app.services.wishlist_ledger import WishlistLedger

router = APIRouter(prefix="/wishlist", tags=["Wishlist"])


@router.get("", response_model=WishlistListResponse)
async def get_wishlist(
    page: PageParams = Depends(),
    identity: TokenIdentity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    """Saved deals, newest first. `deal` is null when the deal no longer exists."""
    rows = WishlistLedger.list_entries(db, identity, limit=page.limit, offset=page.offset)
    total = WishlistLedger.count(db, identity)

    return WishlistListResponse(
        wishlist=[
            WishlistItem(
                id=entry.id,
                deal_id=entry.deal_id,
                alert_enabled=entry.alert_enabled,
                created_at=entry.created_at,
                deal=view,
            )
            for entry, view in rows
        ],
        pagination=Pagination(limit=page.limit, offset=page.offset, total=total),
    )


@router.get("/count", response_model=WishlistCountResponse)
async def get_wishlist_count(
    identity: TokenIdentity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    return WishlistCountResponse(count=WishlistLedger.count(db, identity))


@router.post("", response_model=WishlistAddResponse, status_code=status.HTTP_201_CREATED)
async def add_to_wishlist(
    request: AddToWishlistRequest,
    identity: TokenIdentity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    """Save a deal (idempotent: re-saving overwrites the alert flag)."""
    entry, view = WishlistLedger.add(db, identity, request.deal_id, request.alert_enabled)
    return WishlistAddResponse(
        wishlist=WishlistEntryResponse.model_validate(entry),
        deal=view,
    )


@router.patch("/{deal_id}", response_model=WishlistUpdateResponse)
async def update_wishlist(
    deal_id: str,
    request: UpdateWishlistRequest,
    identity: TokenIdentity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    """Toggle the price-drop alert on a saved deal."""
    entry = WishlistLedger.update(db, identity, deal_id, request.alert_enabled)
    return WishlistUpdateResponse(wishlist=WishlistEntryResponse.model_validate(entry))


@router.delete("/{deal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_from_wishlist(
    deal_id: str,
    identity: TokenIdentity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    WishlistLedger.remove(db, identity, deal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
