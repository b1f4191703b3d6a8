"""
Pytest configuration and fixtures for DealHub tests.
"""

import os

# Test settings must be in place before app modules read them
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["REDIS_ENABLED"] = "false"
os.environ["DEBUG"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret"

from datetime import timedelta
from decimal import Decimal
from itertools import count
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db, utcnow
from app.main import app
from app.models.deal import Deal
from app.models.user import User
from app.models.wishlist import WishlistEntry  # noqa: F401
from app.services.account_service import AccountService
from app.services.token_service import TokenIdentity, TokenService

PASSWORD = "password123"

_sequence = count()


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
def engine():
    """In-memory SQLite shared across sessions via a single connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    """HTTP client bound to the test database (lifespan/seeding not run)."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# Factories
# =============================================================================

def make_user(db: Session, email: str | None = None, is_subscriber: bool = False, name: str = "Test User") -> User:
    email = email or f"user{next(_sequence)}@example.com"
    return AccountService.register(db, email=email, name=name, password=PASSWORD, is_subscriber=is_subscriber)


def make_deal(db: Session, **overrides) -> Deal:
    """Insert a deal directly; `created_at` can be overridden to control ordering."""
    values = {
        "title": f"Sample Deal {next(_sequence)}",
        "description": "A sample deal",
        "price": Decimal("89.99"),
        "original_price": Decimal("199.99"),
        "category": "Electronics",
        "merchant": "TechStore",
        "is_active": True,
        "expires_at": utcnow() + timedelta(days=7),
    }
    values.update(overrides)
    deal = Deal(**values)
    db.add(deal)
    db.commit()
    db.refresh(deal)
    return deal


def identity_for(user: User) -> TokenIdentity:
    return TokenService.verify(TokenService.issue(user))


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {TokenService.issue(user)}"}


@pytest.fixture
def user(db) -> User:
    return make_user(db, email="user@example.com")


@pytest.fixture
def subscriber(db) -> User:
    return make_user(db, email="subscriber@example.com", is_subscriber=True, name="Premium Subscriber")


@pytest.fixture
def deal(db) -> Deal:
    return make_deal(db, title="Premium Wireless Headphones")


@pytest.fixture
def inactive_deal(db) -> Deal:
    return make_deal(db, title="DISABLED: Old Phone Case", is_active=False)


@pytest.fixture
def expired_deal(db) -> Deal:
    return make_deal(db, title="EXPIRED: Vintage Sunglasses", expires_at=utcnow() - timedelta(days=2))


def delete_deal_row(db: Session, deal_id: str) -> None:
    """Hard-delete a deal with foreign keys off, leaving its wishlist rows behind."""
    db.execute(text("PRAGMA foreign_keys=OFF"))
    db.execute(text("DELETE FROM deals WHERE id = :id"), {"id": deal_id})
    db.commit()
    db.expire_all()
