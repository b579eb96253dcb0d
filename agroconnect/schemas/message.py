"""
Pydantic schemas for contact messages.
"""
from typing import Optional
from datetime import datetime
from pydantic import Field, field_validator

from agroconnect.schemas.base import CamelModel


class MessageCreate(CamelModel):
    """Sender is always the caller; it is never read from the payload."""
    receiver_id: str = Field(..., min_length=1)
    product_id: Optional[str] = None
    content: str = Field(..., max_length=5000)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("product_id", mode="before")
    @classmethod
    def blank_product_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class MessageResponse(CamelModel):
    id: str
    sender_id: str
    receiver_id: str
    product_id: Optional[str] = None
    content: str
    read: bool
    created_at: datetime
