"""Pydantic schemas for account registration, login and user responses."""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that speaks camelCase JSON and still accepts snake_case input."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RegisterRequest(CamelModel):
    """Registration payload."""
    email: EmailStr = Field(..., description="Account email (case-insensitive)")
    name: str = Field(..., min_length=2, description="Display name")
    password: str = Field(..., min_length=6, description="Plaintext password")
    is_subscriber: bool = Field(False, description="Subscriber entitlement")

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        # Length is checked on the trimmed name
        return value.strip() if isinstance(value, str) else value


class LoginRequest(CamelModel):
    """Login payload."""
    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=1, description="Plaintext password")


class UserResponse(CamelModel):
    """User data returned by the API (never includes the password hash)."""
    id: str = Field(..., description="Unique user identifier")
    email: str = Field(..., description="User email address")
    name: str = Field(..., description="User display name")
    is_subscriber: bool = Field(..., description="Subscriber entitlement")
    created_at: datetime = Field(..., description="Account registration date")


class AuthResponse(CamelModel):
    """Token plus the user it was issued for."""
    message: str
    token: str
    user: UserResponse


class MeResponse(CamelModel):
    user: UserResponse
