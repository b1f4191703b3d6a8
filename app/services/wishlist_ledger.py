"""
Wishlist Ledger Service.

Per (user, deal) pair the ledger is a two-state machine:

    Absent --add--> Present(alert) --update--> Present(alert')
    Present --remove--> Absent

- `add` is an upsert: re-adding a saved deal overwrites its alert flag, so
  the call is idempotent and safe to retry.
- The upsert is a single `INSERT ... ON CONFLICT (user_id, deal_id) DO UPDATE`
  statement. Concurrent adds for the same pair collapse onto one row at the
  storage layer.
- Each mutation runs in one transaction; on failure the pair is unchanged.
- Every operation passes the Authorization Gate before touching storage.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import utcnow
from app.core.errors import (
    DealInactiveError,
    DealNotFoundError,
    EntryNotFoundError,
    UserNotFoundError,
)
from app.models.deal import Deal
from app.models.wishlist import WishlistEntry
from app.schemas.deal import DealView
from app.services.authorization import AuthorizationGate
from app.services.deal_catalog import build_deal_view
from app.services.token_service import TokenIdentity

logger = logging.getLogger(__name__)
analytics_logger = logging.getLogger("app.analytics")

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _track(event: str, **data) -> None:
    analytics_logger.info("%s %s", event, data)


def _upsert_statement(db: Session, user_id: str, deal_id: str, alert_enabled: bool):
    """Build the dialect-specific insert-or-update on the (user_id, deal_id) key."""
    dialect = db.get_bind().dialect.name
    insert = _UPSERT_DIALECTS.get(dialect)
    if insert is None:
        raise RuntimeError(f"Atomic wishlist upsert is not supported on dialect {dialect!r}")

    stmt = insert(WishlistEntry).values(
        user_id=user_id,
        deal_id=deal_id,
        alert_enabled=alert_enabled,
    )
    return stmt.on_conflict_do_update(
        index_elements=["user_id", "deal_id"],
        set_={"alert_enabled": stmt.excluded.alert_enabled},
    )


def _get_entry(db: Session, user_id: str, deal_id: str) -> Optional[WishlistEntry]:
    return db.execute(
        select(WishlistEntry)
        .where(WishlistEntry.user_id == user_id, WishlistEntry.deal_id == deal_id)
        .execution_options(populate_existing=True)
    ).scalar_one_or_none()


class WishlistLedger:
    """Authorization-gated wishlist membership."""

    @staticmethod
    def add(
        db: Session,
        identity: Optional[TokenIdentity],
        deal_id: str,
        alert_enabled: bool = False,
    ) -> tuple[WishlistEntry, DealView]:
        """
        Save a deal to the caller's wishlist (upsert).

        Raises:
            UnauthorizedError / SubscriberOnlyError: from the gate
            DealNotFoundError: deal does not exist
            DealInactiveError: deal has been deactivated
        """
        identity = AuthorizationGate.check(identity, alert_enabled)

        deal = db.get(Deal, deal_id)
        if deal is None:
            raise DealNotFoundError(f"Deal {deal_id} not found")
        if not deal.is_active:
            raise DealInactiveError()

        try:
            db.execute(_upsert_statement(db, identity.user_id, deal_id, alert_enabled))
            entry = _get_entry(db, identity.user_id, deal_id)
            db.commit()
        except IntegrityError:
            # Only the foreign keys can fail here: user or deal vanished mid-request
            db.rollback()
            logger.warning(f"Wishlist upsert rejected for user {identity.user_id}, deal {deal_id}")
            if db.get(Deal, deal_id) is None:
                raise DealNotFoundError(f"Deal {deal_id} not found")
            raise UserNotFoundError()

        _track("wishlist_add", user_id=identity.user_id, deal_id=deal_id, alert_enabled=alert_enabled)
        return entry, build_deal_view(deal)

    @staticmethod
    def update(
        db: Session,
        identity: Optional[TokenIdentity],
        deal_id: str,
        alert_enabled: bool,
    ) -> WishlistEntry:
        """Set the alert flag on an existing entry. Same-value updates succeed."""
        identity = AuthorizationGate.check(identity, alert_enabled)

        entry = _get_entry(db, identity.user_id, deal_id)
        if entry is None:
            raise EntryNotFoundError()

        entry.alert_enabled = alert_enabled
        db.commit()
        db.refresh(entry)

        _track(
            "alert_enabled" if alert_enabled else "alert_disabled",
            user_id=identity.user_id,
            deal_id=deal_id,
        )
        return entry

    @staticmethod
    def remove(db: Session, identity: Optional[TokenIdentity], deal_id: str) -> None:
        """Hard-delete the caller's entry for `deal_id`."""
        identity = AuthorizationGate.check(identity)

        entry = _get_entry(db, identity.user_id, deal_id)
        if entry is None:
            raise EntryNotFoundError()

        db.delete(entry)
        db.commit()

        _track("wishlist_remove", user_id=identity.user_id, deal_id=deal_id)

    @staticmethod
    def list_entries(
        db: Session,
        identity: Optional[TokenIdentity],
        limit: int,
        offset: int = 0,
        now: Optional[datetime] = None,
    ) -> list[tuple[WishlistEntry, Optional[DealView]]]:
        """
        Caller's entries, newest first, each with the current deal view.

        The deal side is a left join: an entry whose deal no longer exists is
        returned with `None` in place of the view.
        """
        identity = AuthorizationGate.check(identity)

        rows = (
            db.query(WishlistEntry, Deal)
            .outerjoin(Deal, WishlistEntry.deal_id == Deal.id)
            .filter(WishlistEntry.user_id == identity.user_id)
            .order_by(WishlistEntry.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

        now = now or utcnow()
        return [
            (entry, build_deal_view(deal, now) if deal is not None else None)
            for entry, deal in rows
        ]

    @staticmethod
    def count(db: Session, identity: Optional[TokenIdentity]) -> int:
        """Total entries for the caller, whatever the state of their deals."""
        identity = AuthorizationGate.check(identity)
        return (
            db.query(WishlistEntry)
            .filter(WishlistEntry.user_id == identity.user_id)
            .count()
        )

