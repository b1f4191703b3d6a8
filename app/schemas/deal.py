"""
Pydantic schemas for the Deal Catalog.

`DealCreate` validates incoming deal specs. `DealView` is the read model: the
stored deal plus fields derived at read time. It is never persisted.
"""

import re
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import AnyHttpUrl, Field, TypeAdapter, ValidationError, field_validator

from app.schemas.user import CamelModel

PRICE_PATTERN = r"^\d+(\.\d{1,2})?$"
ISO_DATETIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}")

_url_adapter = TypeAdapter(AnyHttpUrl)


class DealCreate(CamelModel):
    """Payload for creating a deal."""
    title: str = Field(..., min_length=3, max_length=255, description="Deal headline")
    description: Optional[str] = Field(None, description="Long description")
    price: str = Field(..., pattern=PRICE_PATTERN, description="Offer price, e.g. '89.99'")
    original_price: str = Field(..., pattern=PRICE_PATTERN, description="Price before the offer")
    image_url: Optional[str] = Field(None, max_length=500, description="Product image URL")
    category: Optional[str] = Field(None, max_length=100, description="Category label")
    merchant: Optional[str] = Field(None, max_length=255, description="Merchant name")
    link: Optional[str] = Field(None, max_length=500, description="Merchant deal URL")
    expires_at: Optional[datetime] = Field(None, description="ISO-8601 expiry timestamp")

    @field_validator("image_url", "link")
    @classmethod
    def _check_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        # Validate only; the submitted string is stored unchanged
        try:
            _url_adapter.validate_python(value)
        except ValidationError:
            raise ValueError("must be a valid URL")
        return value

    @field_validator("expires_at", mode="before")
    @classmethod
    def _check_expiry(cls, value):
        # Wire input must be a full ISO-8601 datetime string; no epoch numbers or bare dates
        if value is None or isinstance(value, datetime):
            return value
        if not isinstance(value, str) or not ISO_DATETIME_PATTERN.match(value):
            raise ValueError("must be an ISO-8601 datetime string")
        return value


class DealView(CamelModel):
    """A deal merged with its derived, non-persisted fields."""
    id: str
    title: str
    description: Optional[str] = None
    price: Decimal
    original_price: Decimal
    image_url: Optional[str] = None
    category: Optional[str] = None
    merchant: Optional[str] = None
    link: Optional[str] = None
    is_active: bool
    expires_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    # Derived
    is_expired: bool = Field(..., description="expiresAt is set and in the past")
    is_disabled: bool = Field(..., description="Deal has been deactivated")
    discount_percentage: int = Field(..., description="Rounded percent off originalPrice")


class Pagination(CamelModel):
    limit: int
    offset: int
    total: int


class DealListResponse(CamelModel):
    deals: list[DealView]
    pagination: Pagination


class DealResponse(CamelModel):
    deal: DealView


class CategoryListResponse(CamelModel):
    categories: list[str]
