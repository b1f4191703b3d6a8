"""
Deals API endpoints.
Public catalog browsing with filtering; deal creation requires a token.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import PageParams, require_identity
from app.core.database import get_db
from app.schemas.deal import (
    CategoryListResponse,
    DealCreate,
    DealListResponse,
    DealResponse,
    Pagination,
)
from app.services.deal_catalog import DealCatalog, DealFilter, build_deal_view
from app.services.token_service import TokenIdentity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/deals", tags=["Deals"])


@router.get("", response_model=DealListResponse)
async def list_deals(
    category: Optional[str] = Query(None, description="Filter: exact category (case-sensitive)"),
    search: Optional[str] = Query(None, description="Filter: substring of title or description"),
    active_only: bool = Query(True, alias="activeOnly", description="Hide deactivated deals"),
    page: PageParams = Depends(),
    db: Session = Depends(get_db),
):
    """List deals, newest first, with derived expiry/discount fields."""
    views, total = DealCatalog.list_deals(
        db,
        DealFilter(category=category, search=search, active_only=active_only),
        limit=page.limit,
        offset=page.offset,
    )
    return DealListResponse(
        deals=views,
        pagination=Pagination(limit=page.limit, offset=page.offset, total=total),
    )


@router.get("/categories", response_model=CategoryListResponse)
async def list_categories(db: Session = Depends(get_db)):
    """Distinct categories of active deals, for filter menus."""
    return CategoryListResponse(categories=DealCatalog.list_categories(db))


@router.get("/{deal_id}", response_model=DealResponse)
async def get_deal(deal_id: str, db: Session = Depends(get_db)):
    """Get a single deal by ID."""
    return DealResponse(deal=DealCatalog.get_deal(db, deal_id))


@router.post("", response_model=DealResponse, status_code=status.HTTP_201_CREATED)
async def create_deal(
    request: DealCreate,
    identity: TokenIdentity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    """Add a deal to the catalog."""
    deal = DealCatalog.create_deal(db, request)
    logger.info(f"Deal {deal.id} created by user {identity.user_id}")
    return DealResponse(deal=build_deal_view(deal))
