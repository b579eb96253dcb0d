"""
Pydantic schemas for Product listings.

``ProductDraft`` and ``ProductPatch`` are the parse-and-validate boundary:
form fields arrive as strings and leave as Decimal/int/str.
"""
from typing import Any, Optional
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from pydantic import AnyHttpUrl, Field, TypeAdapter, ValidationError, ValidationInfo, field_validator

from agroconnect.schemas.base import CamelModel
from agroconnect.schemas.user import UserResponse

CENT = Decimal("0.01")
MAX_PRICE = Decimal("99999999.99")  # Numeric(10, 2)

_url_adapter = TypeAdapter(AnyHttpUrl)

TEXT_FIELDS = ("name", "description", "unit", "location", "category")


def _strip_required(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
    return value


def _parse_price(value: Decimal) -> Decimal:
    if not value.is_finite():
        raise ValueError("must be a number")
    if value > MAX_PRICE:
        raise ValueError(f"must not exceed {MAX_PRICE}")
    if value <= 0:
        raise ValueError("must be greater than 0")
    value = value.quantize(CENT, rounding=ROUND_HALF_UP)
    if value <= 0:
        raise ValueError("must be at least 0.01")
    return value


def _known_category(value: Optional[str], info: ValidationInfo) -> Optional[str]:
    if value is None:
        return None
    value = value.lower()
    # The allowed set is deployment configuration, passed in as validation context
    allowed = (info.context or {}).get("categories")
    if allowed is not None and value not in allowed:
        raise ValueError(f"must be one of: {', '.join(allowed)}")
    return value


def _parse_image_url(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError("must be a URL string")
    value = value.strip()
    if not value:
        return None
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid http(s) URL")
    return value


class ProductDraft(CamelModel):
    """A complete, validated listing as submitted by a seller."""
    name: str = Field(..., max_length=255)
    description: str
    category: str = Field(..., max_length=50)
    price: Decimal
    unit: str = Field(..., max_length=50)
    quantity: int = Field(..., ge=0)
    location: str = Field(..., max_length=255)
    image_url: Optional[str] = None

    strip_text = field_validator(*TEXT_FIELDS, mode="before")(_strip_required)
    check_price = field_validator("price")(_parse_price)
    check_category = field_validator("category")(_known_category)
    check_image_url = field_validator("image_url", mode="before")(_parse_image_url)


class ProductPatch(CamelModel):
    """Partial update; only fields present in the payload are applied."""
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=50)
    price: Optional[Decimal] = None
    unit: Optional[str] = Field(None, max_length=50)
    quantity: Optional[int] = Field(None, ge=0)
    location: Optional[str] = Field(None, max_length=255)
    image_url: Optional[str] = None

    strip_text = field_validator(*TEXT_FIELDS, mode="before")(_strip_required)
    check_image_url = field_validator("image_url", mode="before")(_parse_image_url)
    check_category = field_validator("category")(_known_category)

    @field_validator(*TEXT_FIELDS, "price", "quantity")
    @classmethod
    def not_null(cls, value: Any) -> Any:
        # Only runs for fields present in the payload; absent fields stay unset
        if value is None:
            raise ValueError("may not be null")
        return value

    @field_validator("price")
    @classmethod
    def check_price(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        return None if value is None else _parse_price(value)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ProductResponse(CamelModel):
    """Schema for product response."""
    id: str
    seller_id: str
    name: str
    description: str
    category: str
    price: Decimal
    unit: str
    quantity: int
    location: str
    image_url: Optional[str] = None
    featured: bool
    active: bool
    created_at: datetime


class ProductWithSeller(ProductResponse):
    """Product detail joined with its seller's public profile."""
    seller: UserResponse


class DeleteResponse(CamelModel):
    message: str
