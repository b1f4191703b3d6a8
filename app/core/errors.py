"""
Error hierarchy for every domain failure the API can report.

Each error carries a stable machine-readable code, an HTTP status and a
human message. The API layer turns them into
``{"error": {"code", "message", "category", "details"?}}`` responses.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCategory(str, Enum):
    """High-level error categories for client handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class DealHubError(Exception):
    """Base class for all recognized domain errors."""

    code: str = "DEALHUB_ERROR"
    http_status: int = 500
    category: ErrorCategory = ErrorCategory.INTERNAL
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None, details: Optional[list[dict[str, Any]]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_response(self) -> dict:
        body: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
        }
        if self.details:
            body["details"] = self.details
        return {"error": body}


class ValidationError(DealHubError):
    """Malformed input; `details` holds one entry per offending field."""
    code = "VALIDATION_ERROR"
    http_status = 400
    category = ErrorCategory.VALIDATION
    default_message = "Invalid request data"


# ─── Authentication ─────────────────────────────────────────────

class UnauthorizedError(DealHubError):
    code = "UNAUTHORIZED"
    http_status = 401
    category = ErrorCategory.AUTHENTICATION
    default_message = "Unauthorized"


class MissingTokenError(UnauthorizedError):
    code = "NO_TOKEN"
    default_message = "No token provided"


class MalformedTokenError(UnauthorizedError):
    code = "INVALID_TOKEN"
    default_message = "Invalid token"


class ExpiredTokenError(UnauthorizedError):
    code = "TOKEN_EXPIRED"
    default_message = "Token expired"


class InvalidCredentialsError(DealHubError):
    code = "INVALID_CREDENTIALS"
    http_status = 401
    category = ErrorCategory.AUTHENTICATION
    default_message = "Invalid email or password"


# ─── Business rules ─────────────────────────────────────────────

class SubscriberOnlyError(DealHubError):
    """Alert features are a subscriber entitlement; clients show an upsell on this code."""
    code = "SUBSCRIBER_ONLY"
    http_status = 403
    category = ErrorCategory.BUSINESS_RULE
    default_message = "Only subscribers can enable price alerts"


class DealInactiveError(DealHubError):
    code = "DEAL_INACTIVE"
    http_status = 400
    category = ErrorCategory.BUSINESS_RULE
    default_message = "Deal is no longer active"


# ─── Not found ──────────────────────────────────────────────────

class NotFoundError(DealHubError):
    code = "NOT_FOUND"
    http_status = 404
    category = ErrorCategory.RESOURCE_NOT_FOUND
    default_message = "Resource not found"


class UserNotFoundError(NotFoundError):
    code = "USER_NOT_FOUND"
    default_message = "User not found"


class DealNotFoundError(NotFoundError):
    code = "DEAL_NOT_FOUND"
    default_message = "Deal not found"


class EntryNotFoundError(NotFoundError):
    code = "ENTRY_NOT_FOUND"
    default_message = "Wishlist item not found"


# ─── Conflicts ──────────────────────────────────────────────────

class ConflictError(DealHubError):
    code = "CONFLICT"
    http_status = 400
    category = ErrorCategory.CONFLICT
    default_message = "Resource already exists"


class UserExistsError(ConflictError):
    code = "USER_EXISTS"
    default_message = "User already exists with this email"
