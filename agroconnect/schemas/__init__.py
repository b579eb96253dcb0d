"""
Pydantic schemas for request/response validation.
"""
from agroconnect.schemas.user import (
    AccountType, UserCreate, UserResponse, LoginRequest, AuthResponse
)
from agroconnect.schemas.product import (
    ProductDraft, ProductPatch, ProductResponse, ProductWithSeller, DeleteResponse
)
from agroconnect.schemas.message import MessageCreate, MessageResponse
from agroconnect.schemas.stats import MarketplaceStats, HealthCheck
from agroconnect.schemas.weather import WeatherReport

__all__ = [
    # User schemas
    "AccountType", "UserCreate", "UserResponse", "LoginRequest", "AuthResponse",

    # Product schemas
    "ProductDraft", "ProductPatch", "ProductResponse", "ProductWithSeller", "DeleteResponse",

    # Message schemas
    "MessageCreate", "MessageResponse",

    # Misc
    "MarketplaceStats", "HealthCheck", "WeatherReport",
]
