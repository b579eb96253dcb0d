"""
Landing-page counters.
"""
from typing import Optional

from agroconnect.services.messaging import conversation_key
from agroconnect.storage import EntityKind, EntityStore


def region_of(location: Optional[str]) -> Optional[str]:
    """The last comma-separated part of a location, e.g. "Kumasi, Ashanti Region" -> "Ashanti Region"."""
    if not location:
        return None
    region = location.split(",")[-1].strip()
    return region or None


def marketplace_stats(store: EntityStore) -> dict[str, int]:
    users = store.list_all(EntityKind.USERS)
    products = store.list_all(EntityKind.PRODUCTS)
    messages = store.list_all(EntityKind.MESSAGES)

    conversations = {conversation_key(m.sender_id, m.receiver_id) for m in messages}
    regions = {region for region in (region_of(u.location) for u in users) if region}

    return {
        "users": len(users),
        "products": sum(1 for p in products if p.active),
        "transactions": len(conversations),
        "regions": len(regions),
    }
