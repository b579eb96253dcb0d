"""
Marketplace statistics endpoint.
"""
from fastapi import APIRouter, Depends

from agroconnect.api.deps import get_store
from agroconnect.schemas.stats import MarketplaceStats
from agroconnect.services.stats import marketplace_stats
from agroconnect.storage import EntityStore

router = APIRouter(tags=["Stats"])


@router.get("/stats", response_model=MarketplaceStats)
def get_stats(store: EntityStore = Depends(get_store)):
    """User count, active listings, distinct conversations and distinct regions."""
    return MarketplaceStats(**marketplace_stats(store))
