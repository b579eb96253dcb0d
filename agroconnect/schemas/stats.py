"""
Marketplace-wide counters shown on the landing page.
"""
from pydantic import BaseModel


class MarketplaceStats(BaseModel):
    users: int
    products: int
    transactions: int  # distinct conversations
    regions: int


class HealthCheck(BaseModel):
    status: str
    version: str
    storage: str
