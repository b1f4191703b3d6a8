"""
Authorization Gate.

Runs in front of every Wishlist Ledger operation:
1. a verified token identity is required (otherwise Unauthorized),
2. requesting `alert_enabled=True` requires the token's subscriber flag.

The subscriber flag comes from the token, not the database (see
app.services.token_service for the staleness this implies).
"""

from typing import Optional

from app.core.errors import MissingTokenError, SubscriberOnlyError
from app.services.token_service import TokenIdentity


class AuthorizationGate:

    @staticmethod
    def check(identity: Optional[TokenIdentity], alert_enabled: bool = False) -> TokenIdentity:
        if identity is None:
            raise MissingTokenError()
        if alert_enabled and not identity.is_subscriber:
            raise SubscriberOnlyError()
        return identity
