"""
Product API endpoints: public marketplace reads and seller-only writes.
"""
from typing import Any, Optional
from fastapi import APIRouter, Body, Depends, Query, status

from agroconnect.api.deps import get_app_settings, get_caller, get_store
from agroconnect.core.config import Settings
from agroconnect.core.security import CallerIdentity
from agroconnect.error_handlers import ResourceNotFoundError
from agroconnect.schemas.product import DeleteResponse, ProductResponse, ProductWithSeller
from agroconnect.schemas.user import UserResponse
from agroconnect.services import catalog, listings
from agroconnect.storage import EntityStore

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=list[ProductResponse])
def list_products(
    category: Optional[str] = None,
    search: Optional[str] = None,
    seller_id: Optional[str] = Query(None, alias="sellerId"),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    store: EntityStore = Depends(get_store)
):
    """
    Browse active listings.

    - **category**: Exact category
    - **search**: Case-insensitive text in name or description
    - **sellerId**: Listings of one seller
    - **minPrice** / **maxPrice**: Price bounds; unparseable values are ignored
    - **sortBy**: `newest` (default), `price-asc`, `price-desc` or `name-asc`
    """
    filters = catalog.ProductFilter.from_query(category=category, text=search, seller_id=seller_id)
    return catalog.browse(
        store,
        filters,
        min_price=catalog.parse_price_bound(min_price),
        max_price=catalog.parse_price_bound(max_price),
        sort_key=sort_by
    )


@router.get("/featured", response_model=list[ProductResponse])
def get_featured_products(store: EntityStore = Depends(get_store)):
    """Active featured listings, newest first."""
    return catalog.featured(store)


@router.get("/latest", response_model=list[ProductResponse])
def get_latest_products(
    limit: Optional[int] = None,
    store: EntityStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings)
):
    """The most recently listed active products."""
    return catalog.latest(store, settings.default_latest_limit if limit is None else limit)


@router.get("/mine", response_model=list[ProductResponse])
def get_my_products(
    caller: CallerIdentity = Depends(get_caller),
    store: EntityStore = Depends(get_store)
):
    """The caller's own listings, including deactivated ones."""
    return catalog.seller_listings(store, caller.id)


@router.get("/{product_id}", response_model=ProductWithSeller)
def get_product(product_id: str, store: EntityStore = Depends(get_store)):
    """Get an active product together with its seller's public profile."""
    found = catalog.product_with_seller(store, product_id)
    if found is None:
        raise ResourceNotFoundError("Product", product_id)

    product, seller = found
    return ProductWithSeller.model_validate({
        **product.model_dump(),
        "seller": UserResponse.model_validate(seller),
    })


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: dict[str, Any] = Body(...),
    caller: CallerIdentity = Depends(get_caller),
    store: EntityStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings)
):
    """
    Create a listing owned by the caller.

    Numeric fields may be sent as strings (form input); they are parsed here.
    """
    return listings.create_product(store, caller.id, payload, settings.product_categories)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    payload: dict[str, Any] = Body(...),
    caller: CallerIdentity = Depends(get_caller),
    store: EntityStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings)
):
    """
    Update one of the caller's listings.

    Only provided fields will be updated.
    """
    return listings.update_product(store, caller.id, product_id, payload, settings.product_categories)


@router.delete("/{product_id}", response_model=DeleteResponse)
def delete_product(
    product_id: str,
    caller: CallerIdentity = Depends(get_caller),
    store: EntityStore = Depends(get_store)
):
    """
    Delete a product (soft delete - sets active to False).
    """
    listings.delete_product(store, caller.id, product_id)
    return DeleteResponse(message="Product deleted successfully")
