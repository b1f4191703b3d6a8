"""
Database Seed Script.

Seeds demo accounts and a small deal catalog:
1. user@example.com        – regular user
2. subscriber@example.com  – subscriber (can enable price alerts)
3. demo@buzdealz.com       – regular demo user

All demo accounts use the password `password123`. The catalog holds eight
live deals, one expired deal and one disabled deal.
"""

import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from app.core.database import utcnow
from app.models.deal import Deal
from app.models.user import User
from app.services.account_service import AccountService
from app.services.deal_catalog import DealCatalog

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    {"email": "user@example.com", "name": "Test User", "is_subscriber": False},
    {"email": "subscriber@example.com", "name": "Premium Subscriber", "is_subscriber": True},
    {"email": "demo@buzdealz.com", "name": "Demo User", "is_subscriber": False},
]

# (title, description, price, original_price, category, merchant, slug, image_id, expires_in_days, active)
DEMO_DEALS = [
    (
        "Premium Wireless Headphones - Noise Cancelling",
        "Experience crystal-clear audio with active noise cancellation and 30-hour battery life.",
        "89.99", "199.99", "Electronics", "TechStore", "headphones",
        "photo-1505740420928-5e560c06d30e", 7, True,
    ),
    (
        "Smart Watch Series 5 - Fitness Tracker",
        "Track your health and fitness goals with GPS and heart rate monitoring.",
        "149.99", "299.99", "Wearables", "GadgetHub", "smartwatch",
        "photo-1523275335684-37898b6baf30", 5, True,
    ),
    (
        "Designer Leather Backpack - Premium Quality",
        "Spacious and stylish backpack made with genuine leather.",
        "79.99", "149.99", "Fashion", "StyleStore", "backpack",
        "photo-1553062407-98eeb64c6a62", 10, True,
    ),
    (
        "4K Ultra HD Action Camera",
        "Capture every adventure in stunning 4K resolution with waterproof design.",
        "199.99", "399.99", "Electronics", "CameraPro", "camera",
        "photo-1526170375885-4d8ecf77b99f", 3, True,
    ),
    (
        "Portable Bluetooth Speaker - Waterproof",
        "360° sound with deep bass and 24-hour battery life.",
        "49.99", "99.99", "Audio", "SoundWave", "speaker",
        "photo-1608043152269-423dbba4e7e1", 14, True,
    ),
    (
        "Premium Yoga Mat with Carry Bag",
        "Extra thick, non-slip yoga mat. Includes carrying strap and bag.",
        "29.99", "59.99", "Fitness", "FitLife", "yoga-mat",
        "photo-1601925260368-ae2f83cf8b7f", 20, True,
    ),
    (
        "Mechanical Gaming Keyboard - RGB Backlit",
        "Professional gaming keyboard with mechanical switches and RGB lighting.",
        "79.99", "149.99", "Gaming", "GamersWorld", "keyboard",
        "photo-1587829741301-dc798b83add3", 12, True,
    ),
    (
        "Instant Pot Multi-Cooker - 6 Quart",
        "7-in-1 programmable pressure cooker, slow cooker, rice cooker and steamer.",
        "69.99", "119.99", "Home", "KitchenPro", "instant-pot",
        "photo-1585515320310-259814833e62", 8, True,
    ),
    (
        "EXPIRED: Vintage Sunglasses",
        "Classic style sunglasses - this deal has expired",
        "19.99", "49.99", "Fashion", "FashionHub", "sunglasses",
        "photo-1572635196237-14b3f281503f", -2, True,
    ),
    (
        "DISABLED: Old Phone Case",
        "This product is no longer available",
        "9.99", "29.99", "Accessories", "MobileMart", "phone-case",
        "photo-1556656793-08538906a9f8", 5, False,
    ),
]


def seed_database(db: Session) -> None:
    """
    Seeds the database with demo users and deals.
    Skips seeding if users already exist.
    """
    existing = db.query(User).count()
    if existing > 0:
        logger.info(f"Database already has {existing} users, skipping seed")
        return

    logger.info(f"Seeding database with {len(DEMO_USERS)} users and {len(DEMO_DEALS)} deals...")

    for config in DEMO_USERS:
        AccountService.register(db, password=DEMO_PASSWORD, **config)

    now = utcnow()
    for (title, description, price, original_price, category, merchant,
         slug, image_id, expires_in_days, active) in DEMO_DEALS:
        deal = DealCatalog.create_deal(db, {
            "title": title,
            "description": description,
            "price": price,
            "original_price": original_price,
            "image_url": f"https://images.unsplash.com/{image_id}?w=800&h=600&fit=crop",
            "category": category,
            "merchant": merchant,
            "link": f"https://example.com/deal/{slug}",
            "expires_at": now + timedelta(days=expires_in_days),
        })
        if not active:
            _deactivate(db, deal)

    logger.info("Database seeded successfully")


def _deactivate(db: Session, deal: Deal) -> None:
    """Stand-in for the external process that pulls offers."""
    deal.is_active = False
    db.commit()
