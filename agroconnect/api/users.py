"""
Public user endpoints.
"""
from typing import Optional
from fastapi import APIRouter, Depends

from agroconnect.api.deps import get_app_settings, get_store
from agroconnect.core.config import Settings
from agroconnect.schemas.user import UserResponse
from agroconnect.services import catalog
from agroconnect.storage import EntityStore

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/trusted-sellers", response_model=list[UserResponse])
def get_trusted_sellers(
    limit: Optional[int] = None,
    store: EntityStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings)
):
    """Verified farmers, oldest accounts first."""
    if limit is None:
        limit = settings.default_trusted_sellers_limit
    return [UserResponse.model_validate(u) for u in catalog.trusted_sellers(store, limit)]
