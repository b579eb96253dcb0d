"""
Canonical records handed out by every Entity Store backend.

These are internal types: ``UserRecord`` carries the password hash and must
never be returned from an endpoint as-is (see ``agroconnect.schemas.user``).
"""
from typing import Optional
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, field_validator

from agroconnect.utils import ensure_utc


class Record(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class UserRecord(Record):
    email: str
    password_hash: str
    first_name: str
    last_name: str
    account_type: str
    location: Optional[str] = None
    phone: Optional[str] = None
    verified: bool = False


class ProductRecord(Record):
    seller_id: str
    name: str
    description: str
    category: str
    price: Decimal
    unit: str
    quantity: int
    location: str
    image_url: Optional[str] = None
    featured: bool = False
    active: bool = True


class MessageRecord(Record):
    sender_id: str
    receiver_id: str
    product_id: Optional[str] = None
    content: str
    read: bool = False
