"""
Deal Catalog Service.

Read and create operations over stored deals. Every read goes through
`build_deal_view`, a pure function of the stored deal and the current time,
so `is_expired`, `is_disabled` and `discount_percentage` never drift from the
authoritative price and expiry columns.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_FLOOR
from typing import Any, Optional, Union

import pydantic
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import utcnow, to_naive_utc
from app.core.errors import DealNotFoundError, ValidationError
from app.core.redis import cache_delete, cache_get, cache_set
from app.models.deal import Deal
from app.schemas.deal import DealCreate, DealView

logger = logging.getLogger(__name__)
settings = get_settings()

CATEGORY_CACHE_KEY = "deals:categories:active"


def calculate_discount(original_price: Decimal, price: Decimal) -> int:
    """
    Percent off `original_price`, rounded half-up (toward +inf).

    Returns 0 when there is no positive original price. A price above the
    original yields a negative percentage.
    """
    original_price = Decimal(original_price)
    price = Decimal(price)
    if original_price <= 0:
        return 0
    percent = (original_price - price) * 100 / original_price
    return int((percent + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


def build_deal_view(deal: Deal, now: Optional[datetime] = None) -> DealView:
    """Merge a stored deal with its derived fields as of `now` (UTC)."""
    now = to_naive_utc(now) if now is not None else utcnow()
    expires_at = to_naive_utc(deal.expires_at)

    return DealView(
        id=deal.id,
        title=deal.title,
        description=deal.description,
        price=deal.price,
        original_price=deal.original_price,
        image_url=deal.image_url,
        category=deal.category,
        merchant=deal.merchant,
        link=deal.link,
        is_active=deal.is_active,
        expires_at=deal.expires_at,
        created_at=deal.created_at,
        updated_at=deal.updated_at,
        is_expired=expires_at is not None and expires_at < now,
        is_disabled=not deal.is_active,
        discount_percentage=calculate_discount(deal.original_price, deal.price),
    )


@dataclass
class DealFilter:
    """Catalog listing filters."""
    category: Optional[str] = None
    search: Optional[str] = None
    active_only: bool = True


class DealCatalog:
    """Deal listing, lookup and creation."""

    @staticmethod
    def list_deals(
        db: Session,
        filters: DealFilter,
        limit: int,
        offset: int = 0,
        now: Optional[datetime] = None,
    ) -> tuple[list[DealView], int]:
        """
        List deals newest first.

        `category` is an exact, case-sensitive match. `search` matches title
        OR description case-insensitively. The limit/offset window is not a
        stable cursor: deals inserted between calls shift later pages.

        Returns:
            (deal views for the window, total number of matching deals)
        """
        query = db.query(Deal)

        if filters.active_only:
            query = query.filter(Deal.is_active.is_(True))
        if filters.category:
            query = query.filter(Deal.category == filters.category)
        if filters.search:
            needle = filters.search.lower()
            query = query.filter(
                or_(
                    func.lower(Deal.title).contains(needle, autoescape=True),
                    func.lower(Deal.description).contains(needle, autoescape=True),
                )
            )

        total = query.count()
        deals = (
            query
            .order_by(Deal.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

        now = now or utcnow()
        return [build_deal_view(deal, now) for deal in deals], total

    @staticmethod
    def get_deal(db: Session, deal_id: str, now: Optional[datetime] = None) -> DealView:
        deal = db.get(Deal, deal_id)
        if deal is None:
            raise DealNotFoundError(f"Deal {deal_id} not found")
        return build_deal_view(deal, now)

    @staticmethod
    def create_deal(db: Session, data: Union[DealCreate, dict[str, Any]]) -> Deal:
        """
        Persist a new deal.

        Accepts an already-validated `DealCreate` (HTTP layer) or a raw dict
        (seed script, MCP tools); raw dicts are validated here and rejected
        with field-level `ValidationError` details.
        """
        if not isinstance(data, DealCreate):
            try:
                data = DealCreate.model_validate(data)
            except pydantic.ValidationError as e:
                raise ValidationError(
                    "Invalid deal data",
                    details=[
                        {
                            "field": ".".join(str(loc) for loc in err["loc"]),
                            "message": err["msg"],
                            "type": err["type"],
                        }
                        for err in e.errors()
                    ],
                )

        deal = Deal(
            title=data.title,
            description=data.description,
            price=Decimal(data.price),
            original_price=Decimal(data.original_price),
            image_url=data.image_url,
            category=data.category,
            merchant=data.merchant,
            link=data.link,
            expires_at=to_naive_utc(data.expires_at),
        )
        db.add(deal)
        db.commit()
        db.refresh(deal)

        cache_delete(CATEGORY_CACHE_KEY)
        logger.info(f"Created deal {deal.id} ({deal.title!r})")
        return deal

    @staticmethod
    def list_categories(db: Session) -> list[str]:
        """
        Distinct categories of active deals, sorted.

        Values are deduplicated exactly as stored: "Electronics" and
        "electronics" are two categories, matching the exact-match filter.
        """
        cached = cache_get(CATEGORY_CACHE_KEY)
        if cached is not None:
            return cached

        rows = (
            db.query(Deal.category)
            .filter(Deal.is_active.is_(True), Deal.category.is_not(None))
            .distinct()
            .order_by(Deal.category)
            .all()
        )
        categories = [row[0] for row in rows]

        cache_set(CATEGORY_CACHE_KEY, categories, ttl=settings.CATEGORY_CACHE_TTL)
        return categories
