"""
Pydantic schemas for User model and authentication.
"""
from typing import Literal, Optional
from datetime import datetime
from pydantic import EmailStr, Field, field_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from agroconnect.schemas.base import CamelModel

AccountType = Literal["farmer", "buyer"]


class UserCreate(CamelModel):
    """Schema for user registration. ``verified`` is not accepted from clients."""
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    account_type: AccountType
    location: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)

    @field_validator("first_name", "last_name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("location", "phone")
    @classmethod
    def empty_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class UserResponse(CamelModel):
    """Public view of a user; the password hash is deliberately absent."""
    id: str
    email: str
    first_name: str
    last_name: str
    account_type: str
    location: Optional[str] = None
    phone: Optional[str] = None
    verified: bool
    created_at: datetime


class LoginRequest(CamelModel):
    """Schema for login request."""
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        # Same normalisation EmailStr applies at registration; malformed input
        # is looked up verbatim and fails as bad credentials
        try:
            _, email = validate_email(value)
        except PydanticCustomError:
            return value
        return email


class AuthResponse(CamelModel):
    """Returned by register and login."""
    user: UserResponse
    token: str
