"""
SQLAlchemy models for the AgroConnect application.
Import all models here to ensure they're registered with SQLAlchemy.
"""
from agroconnect.models.user import User
from agroconnect.models.product import Product
from agroconnect.models.message import Message

__all__ = [
    "User",
    "Product",
    "Message",
]
