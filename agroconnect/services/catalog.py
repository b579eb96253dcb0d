"""
Catalog queries over the product collection.

Every function here is a pure read of the store's current snapshot: filter
predicates are applied one after another, then the result is ordered.
Inactive (soft-deleted) products never leave this module except through
``seller_listings``, which is the owner's own view.
"""
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Sequence

from agroconnect.logging_config import get_logger
from agroconnect.storage import EntityKind, EntityStore, ProductRecord, UserRecord

logger = get_logger("catalog")

SORT_NEWEST = "newest"
SORT_PRICE_ASC = "price-asc"
SORT_PRICE_DESC = "price-desc"
SORT_NAME_ASC = "name-asc"

SORT_KEYS = (SORT_NEWEST, SORT_PRICE_ASC, SORT_PRICE_DESC, SORT_NAME_ASC)

# Names used by the original marketplace page
SORT_ALIASES = {
    "price-low": SORT_PRICE_ASC,
    "price-high": SORT_PRICE_DESC,
    "name": SORT_NAME_ASC,
}


@dataclass(frozen=True)
class ProductFilter:
    """Conjunctive product predicates; ``None`` means "don't filter on this"."""
    category: Optional[str] = None
    text: Optional[str] = None
    seller_id: Optional[str] = None

    @classmethod
    def from_query(
        cls,
        category: Optional[str] = None,
        text: Optional[str] = None,
        seller_id: Optional[str] = None
    ) -> "ProductFilter":
        """Build a filter from raw query-string values, treating blanks as absent."""
        def clean(value: Optional[str]) -> Optional[str]:
            if value is None:
                return None
            return value.strip() or None

        category = clean(category)
        return cls(
            category=category.lower() if category else None,
            text=clean(text),
            seller_id=clean(seller_id)
        )

    def matches(self, product: ProductRecord) -> bool:
        if self.category is not None and product.category != self.category:
            return False
        if self.seller_id is not None and product.seller_id != self.seller_id:
            return False
        if self.text is not None:
            needle = self.text.casefold()
            if needle not in product.name.casefold() and needle not in product.description.casefold():
                return False
        return True


def _newest_first(products: Iterable[ProductRecord]) -> list[ProductRecord]:
    # sorted() is stable with reverse=True, so equal timestamps keep store order
    return sorted(products, key=lambda p: p.created_at, reverse=True)


def _active_products(store: EntityStore) -> list[ProductRecord]:
    return [p for p in store.list_all(EntityKind.PRODUCTS) if p.active]


def search(store: EntityStore, filters: Optional[ProductFilter] = None) -> list[ProductRecord]:
    """Active products matching every supplied predicate, newest first."""
    filters = filters or ProductFilter()
    return _newest_first(p for p in _active_products(store) if filters.matches(p))


def parse_price_bound(raw: Optional[str]) -> Optional[Decimal]:
    """Parse a min/max price from the query string; anything unusable means "no bound"."""
    if raw is None:
        return None
    raw = str(raw).strip()
    if not raw:
        return None
    try:
        value = Decimal(raw)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def apply_price_range(
    products: Iterable[ProductRecord],
    min_price: Optional[Decimal] = None,
    max_price: Optional[Decimal] = None
) -> list[ProductRecord]:
    """Keep products with ``min_price <= price <= max_price``; a missing bound is open."""
    result = []
    for product in products:
        if min_price is not None and product.price < min_price:
            continue
        if max_price is not None and product.price > max_price:
            continue
        result.append(product)
    return result


def normalize_sort_key(sort_key: Optional[str]) -> str:
    if not sort_key:
        return SORT_NEWEST
    sort_key = sort_key.strip().lower()
    sort_key = SORT_ALIASES.get(sort_key, sort_key)
    return sort_key if sort_key in SORT_KEYS else SORT_NEWEST


def sort_products(products: Sequence[ProductRecord], sort_key: Optional[str] = None) -> list[ProductRecord]:
    """
    Order products by one of ``SORT_KEYS``.

    Price and name orderings break ties by insertion (creation) order.
    """
    sort_key = normalize_sort_key(sort_key)
    if sort_key == SORT_NEWEST:
        return _newest_first(products)

    by_insertion = sorted(products, key=lambda p: p.created_at)
    if sort_key == SORT_PRICE_ASC:
        return sorted(by_insertion, key=lambda p: p.price)
    if sort_key == SORT_PRICE_DESC:
        return sorted(by_insertion, key=lambda p: p.price, reverse=True)
    return sorted(by_insertion, key=lambda p: p.name.casefold())


def browse(
    store: EntityStore,
    filters: Optional[ProductFilter] = None,
    min_price: Optional[Decimal] = None,
    max_price: Optional[Decimal] = None,
    sort_key: Optional[str] = None
) -> list[ProductRecord]:
    """Marketplace listing: search, then price range, then ordering."""
    products = search(store, filters)
    products = apply_price_range(products, min_price, max_price)
    return sort_products(products, sort_key)


def featured(store: EntityStore) -> list[ProductRecord]:
    """Active products flagged as featured, newest first."""
    return [p for p in search(store) if p.featured]


def latest(store: EntityStore, limit: int = 6) -> list[ProductRecord]:
    """The ``limit`` most recently created active products."""
    if limit <= 0:
        return []
    return search(store)[:limit]


def trusted_sellers(store: EntityStore, limit: int = 6) -> list[UserRecord]:
    """Verified farmers, longest-standing accounts first."""
    if limit <= 0:
        return []
    sellers = [
        u for u in store.list_all(EntityKind.USERS)
        if u.account_type == "farmer" and u.verified
    ]
    sellers.sort(key=lambda u: u.created_at)
    return sellers[:limit]


def product_with_seller(store: EntityStore, product_id: str) -> Optional[tuple[ProductRecord, UserRecord]]:
    """
    Look up an active product together with its seller.

    Returns ``None`` when the product is missing or inactive, and also when
    its seller cannot be resolved (logged as a data-integrity failure).
    """
    product = store.get(EntityKind.PRODUCTS, product_id)
    if product is None or not product.active:
        return None

    seller = store.get(EntityKind.USERS, product.seller_id)
    if seller is None:
        logger.error(f"Integrity failure: product {product.id} references missing seller {product.seller_id}")
        return None

    return product, seller


def seller_listings(store: EntityStore, seller_id: str) -> list[ProductRecord]:
    """All of a seller's products, including deactivated ones, newest first."""
    return _newest_first(
        p for p in store.list_all(EntityKind.PRODUCTS) if p.seller_id == seller_id
    )
