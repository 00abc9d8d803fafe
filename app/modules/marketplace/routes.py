from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.marketplace.schemas import SearchResult
from app.modules.marketplace.service import MarketplaceService, parse_filters
from supabase import Client
from typing import Optional

router = APIRouter(prefix="/marketplace", tags=["marketplace"])


def get_marketplace_service(supabase: Client = Depends(get_supabase)) -> MarketplaceService:
    return MarketplaceService(supabase)


@router.get("", response_model=SearchResult)
async def search_profiles(
    search: Optional[str] = None,
    location: Optional[str] = None,
    role: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    service: MarketplaceService = Depends(get_marketplace_service)
):
    """Search profiles by free text, location and role. Public."""
    filters = parse_filters(search=search, location=location, role=role, limit=limit, offset=offset)
    return service.search_profiles(filters)
