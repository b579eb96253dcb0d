"""
Sample marketplace content for demos and local development.
"""
from decimal import Decimal

from agroconnect.core.config import Settings
from agroconnect.core.security import get_password_hash
from agroconnect.logging_config import get_logger
from agroconnect.storage import EntityKind, EntityStore

logger = get_logger("seed")

SAMPLE_PASSWORD = "agroconnect-demo"

SAMPLE_FARMERS = [
    {
        "key": "kwame",
        "email": "kwame@example.com",
        "first_name": "Kwame",
        "last_name": "Asante",
        "account_type": "farmer",
        "location": "Kumasi, Ashanti Region",
        "phone": "+233 24 123 4567",
        "verified": True,
    },
    {
        "key": "akosua",
        "email": "akosua@example.com",
        "first_name": "Akosua",
        "last_name": "Mensah",
        "account_type": "farmer",
        "location": "Accra, Greater Accra",
        "phone": "+233 24 234 5678",
        "verified": True,
    },
]

SAMPLE_PRODUCTS = [
    {
        "seller": "kwame",
        "name": "Premium Tomatoes",
        "description": "Fresh, organic tomatoes from Ashanti region farms. Perfect for cooking and salads.",
        "category": "crops",
        "price": Decimal("45.00"),
        "unit": "kg",
        "quantity": 100,
        "location": "Kumasi",
        "image_url": "https://images.unsplash.com/photo-1592924357228-91a4daadcfea?w=400&h=300&fit=crop",
    },
    {
        "seller": "akosua",
        "name": "Small Tractor",
        "description": "Reliable 25HP tractor perfect for small to medium farms. Well maintained.",
        "category": "tools",
        "price": Decimal("48000.00"),
        "unit": "unit",
        "quantity": 1,
        "location": "Accra",
        "image_url": "https://images.unsplash.com/photo-1625246333195-78d9c38ad449?w=400&h=300&fit=crop",
    },
    {
        "seller": "kwame",
        "name": "Dry Yellow Corn",
        "description": "Premium quality corn, perfect for animal feed or processing. Clean and dry.",
        "category": "crops",
        "price": Decimal("8.50"),
        "unit": "kg",
        "quantity": 500,
        "location": "Tamale",
        "image_url": "https://images.unsplash.com/photo-1551754655-cd27e38d2076?w=400&h=300&fit=crop",
    },
    {
        "seller": "akosua",
        "name": "NPK Fertilizer",
        "description": "Complete nutrition for all crop types. High quality 50kg bags.",
        "category": "medications",
        "price": Decimal("125.00"),
        "unit": "bag",
        "quantity": 20,
        "location": "Cape Coast",
        "image_url": "https://images.unsplash.com/photo-1416879595882-3373a0480b5b?w=400&h=300&fit=crop",
    },
]


def seed_sample_data(store: EntityStore, settings: Settings) -> bool:
    """
    Insert the sample farmers and their featured listings.

    Does nothing when any user already exists. Returns whether data was added.
    """
    if store.count(EntityKind.USERS) > 0:
        logger.info("Sample data skipped: users already present")
        return False

    password_hash = get_password_hash(SAMPLE_PASSWORD, settings)
    seller_ids = {}
    for farmer in SAMPLE_FARMERS:
        values = {k: v for k, v in farmer.items() if k != "key"}
        user = store.insert(EntityKind.USERS, {**values, "password_hash": password_hash})
        seller_ids[farmer["key"]] = user.id

    for sample in SAMPLE_PRODUCTS:
        values = {k: v for k, v in sample.items() if k != "seller"}
        # Sample listings may use categories a deployment has not enabled; they are kept anyway
        store.insert(EntityKind.PRODUCTS, {
            **values,
            "seller_id": seller_ids[sample["seller"]],
            "featured": True,
            "active": True,
        })

    logger.info(f"Seeded {len(SAMPLE_FARMERS)} farmers and {len(SAMPLE_PRODUCTS)} products")
    return True
