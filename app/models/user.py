"""
User model: a registered account with credentials and the subscriber entitlement.
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        doc="Unique user identifier (UUID)"
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        doc="Lower-cased email address"
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="User display name"
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="bcrypt hash of the password"
    )
    is_subscriber: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        doc="Entitles the user to price-drop alerts"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utcnow,
        nullable=False,
        doc="Account registration timestamp (UTC)"
    )

    wishlist_entries = relationship(
        "WishlistEntry",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, subscriber={self.is_subscriber})>"
