from typing import Optional

from mcp.server.fastmcp import FastMCP
from contextlib import contextmanager

# Import standard app components
from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.errors import DealNotFoundError
from app.services.deal_catalog import DealCatalog, DealFilter

settings = get_settings()

# Create an MCP server instance
mcp = FastMCP("DealHub-Catalog-Server")


@contextmanager
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@mcp.tool()
def list_deals(
    category: Optional[str] = None,
    search: Optional[str] = None,
    active_only: bool = True,
    limit: int = 20,
) -> dict:
    """List catalog deals, newest first, with expiry and discount fields."""
    limit = max(1, min(limit, settings.MAX_PAGE_LIMIT))
    with get_db() as db:
        views, total = DealCatalog.list_deals(
            db,
            DealFilter(category=category, search=search, active_only=active_only),
            limit=limit,
        )
        return {
            "deals": [view.model_dump(mode="json", by_alias=True) for view in views],
            "total": total,
        }


@mcp.tool()
def get_deal(deal_id: str) -> dict:
    """Retrieve a single deal with its derived fields."""
    with get_db() as db:
        try:
            view = DealCatalog.get_deal(db, deal_id)
        except DealNotFoundError as e:
            return {"error": e.message, "code": e.code}
        return view.model_dump(mode="json", by_alias=True)


@mcp.tool()
def list_categories() -> list[str]:
    """Distinct categories of active deals."""
    with get_db() as db:
        return DealCatalog.list_categories(db)


if __name__ == "__main__":
    # Start the standard streaming stdio server
    print("Starting DealHub Catalog MCP Server on stdio...")
    mcp.run()
