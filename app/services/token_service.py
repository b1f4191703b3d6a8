"""
Token Service.

Issues and verifies HS256 JWTs that carry the caller's identity:
- `sub`            user id
- `email`          user email
- `is_subscriber`  subscriber entitlement at issue time
- `iat` / `exp`    issue time and expiry (JWT_EXPIRE_DAYS, 7 by default)

Verification is stateless: there is no revocation list and the database is
never consulted. The subscriber flag therefore reflects the account as it was
when the token was issued. If a subscription changes mid-session the old
value stays in effect until the user logs in again and receives a new token.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from app.core.config import get_settings
from app.core.errors import ExpiredTokenError, MalformedTokenError, MissingTokenError
from app.models.user import User

logger = logging.getLogger(__name__)
settings = get_settings()


@dataclass(frozen=True)
class TokenIdentity:
    """Identity recovered from a verified token."""
    user_id: str
    email: str
    is_subscriber: bool
    expires_at: datetime


class TokenService:
    """Stateless JWT issue/verify."""

    @staticmethod
    def issue(user: User, expires_delta: Optional[timedelta] = None) -> str:
        """Sign a token for `user` valid for `expires_delta` (default JWT_EXPIRE_DAYS)."""
        issued_at = datetime.now(timezone.utc)
        expire = issued_at + (expires_delta or timedelta(days=settings.JWT_EXPIRE_DAYS))

        payload = {
            "sub": str(user.id),
            "email": user.email,
            "is_subscriber": bool(user.is_subscriber),
            "iat": issued_at,
            "exp": expire,
        }
        return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    @staticmethod
    def verify(token: Optional[str]) -> TokenIdentity:
        """
        Decode and validate a token.

        Raises:
            MissingTokenError: no token was presented
            ExpiredTokenError: token is past its `exp`
            MalformedTokenError: bad signature, corrupt structure or missing claims
        """
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        except ExpiredSignatureError:
            raise ExpiredTokenError()
        except JWTError as e:
            logger.info(f"Rejected token: {e}")
            raise MalformedTokenError()

        user_id = payload.get("sub")
        email = payload.get("email")
        is_subscriber = payload.get("is_subscriber")
        exp = payload.get("exp")
        if not user_id or not email or not isinstance(is_subscriber, bool) or exp is None:
            raise MalformedTokenError()

        return TokenIdentity(
            user_id=user_id,
            email=email,
            is_subscriber=is_subscriber,
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )
