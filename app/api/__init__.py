# API Routes
from app.api.health import router as health_router
from app.api.auth import router as auth_router
from app.api.deals import router as deals_router
from app.api.wishlist import router as wishlist_router

__all__ = ["health_router", "auth_router", "deals_router", "wishlist_router"]
