"""
Wishlist entry model linking one user to one deal with an alert preference.

The composite unique constraint on (user_id, deal_id) is what the ledger's
upsert targets; at most one row exists per pair.
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Boolean, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, utcnow


class WishlistEntry(Base):
    __tablename__ = "wishlist"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        doc="Unique wishlist entry identifier (UUID)"
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        doc="Owning user"
    )
    deal_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("deals.id", ondelete="CASCADE"),
        nullable=False,
        doc="Saved deal"
    )
    alert_enabled: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        doc="Price-drop alert flag (subscribers only)"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utcnow,
        nullable=False,
    )

    user = relationship("User", back_populates="wishlist_entries")
    deal = relationship("Deal", back_populates="wishlist_entries")

    __table_args__ = (
        UniqueConstraint("user_id", "deal_id", name="uq_wishlist_user_deal"),
        Index("wishlist_user_id_idx", "user_id"),
        Index("wishlist_deal_id_idx", "deal_id"),
        Index("wishlist_created_at_idx", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<WishlistEntry(user={self.user_id}, deal={self.deal_id}, "
            f"alert={self.alert_enabled})>"
        )
