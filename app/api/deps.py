"""
Shared FastAPI dependencies: bearer-token identity and pagination.
"""

from typing import Optional

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import get_settings
from app.services.token_service import TokenIdentity, TokenService

settings = get_settings()

# auto_error=False so a missing header surfaces as NO_TOKEN instead of FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


def require_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenIdentity:
    """Resolve `Authorization: Bearer <token>` into a verified identity."""
    token = credentials.credentials if credentials else None
    return TokenService.verify(token)


class PageParams:
    """limit/offset query parameters shared by list endpoints."""

    def __init__(
        self,
        limit: int = Query(
            settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT, description="Max results"
        ),
        offset: int = Query(0, ge=0, description="Offset for pagination"),
    ):
        self.limit = limit
        self.offset = offset
