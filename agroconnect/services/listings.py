"""
Seller-side product mutations.

Only the owning seller may change or remove a listing. A product owned by
someone else is reported exactly like a missing one. Removal only flips
``active`` off; rows are never deleted here.
"""
from typing import Any, Mapping, Sequence

from agroconnect.error_handlers import ResourceNotFoundError
from agroconnect.logging_config import get_logger
from agroconnect.schemas.product import ProductDraft, ProductPatch
from agroconnect.services.validation import parse_payload
from agroconnect.storage import EntityKind, EntityStore, ProductRecord

logger = get_logger("listings")


def _owned_product(store: EntityStore, caller_id: str, product_id: str) -> ProductRecord:
    product = store.get(EntityKind.PRODUCTS, product_id)
    if product is None or product.seller_id != caller_id:
        raise ResourceNotFoundError("Product", product_id)
    return product


def create_product(
    store: EntityStore,
    caller_id: str,
    payload: Mapping[str, Any],
    categories: Sequence[str]
) -> ProductRecord:
    """
    Validate a new listing and store it under the caller's id.

    Raises:
        ValidationError: listing every offending field; nothing is stored
    """
    draft = parse_payload(
        ProductDraft, payload, "Invalid product data", context={"categories": list(categories)}
    )

    values = draft.model_dump()
    values.update(seller_id=caller_id, featured=False, active=True)

    product = store.insert(EntityKind.PRODUCTS, values)
    logger.info(f"Product {product.id} listed by seller {caller_id}")
    return product


def update_product(
    store: EntityStore,
    caller_id: str,
    product_id: str,
    payload: Mapping[str, Any],
    categories: Sequence[str]
) -> ProductRecord:
    """
    Apply a partial update to one of the caller's listings.

    ``id``, ``sellerId``, ``createdAt``, ``featured`` and ``active`` in the
    payload are ignored.

    Raises:
        ResourceNotFoundError: no such product, or not the caller's
        ValidationError: a supplied field is invalid; nothing is changed
    """
    _owned_product(store, caller_id, product_id)

    patch = parse_payload(
        ProductPatch, payload, "Invalid product data", context={"categories": list(categories)}
    )
    changes = patch.changes()
    if not changes:
        return _owned_product(store, caller_id, product_id)

    updated = store.update(EntityKind.PRODUCTS, product_id, changes)
    if updated is None:
        raise ResourceNotFoundError("Product", product_id)

    logger.info(f"Product {product_id} updated by seller {caller_id}: {sorted(changes)}")
    return updated


def delete_product(store: EntityStore, caller_id: str, product_id: str) -> ProductRecord:
    """
    Soft-delete one of the caller's listings. Repeating the call is harmless.

    Raises:
        ResourceNotFoundError: no such product, or not the caller's
    """
    _owned_product(store, caller_id, product_id)

    updated = store.update(EntityKind.PRODUCTS, product_id, {"active": False})
    if updated is None:
        raise ResourceNotFoundError("Product", product_id)

    logger.info(f"Product {product_id} deactivated by seller {caller_id}")
    return updated
