"""
User model for authentication and seller profiles.
"""
from typing import Optional
from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agroconnect.core.database import Base


class User(Base):
    """User account model."""

    __tablename__ = "users"

    # User credentials
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Profile information
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    account_type: Mapped[str] = mapped_column(String(20), nullable=False)  # farmer / buyer
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Account status
    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Relationships
    products = relationship("Product", back_populates="seller")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, account_type={self.account_type})>"
