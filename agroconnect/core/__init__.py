"""Core application modules."""
from agroconnect.core.config import Settings, settings, get_settings
from agroconnect.core.database import Base, create_db_engine, create_session_factory, init_db
from agroconnect.core.security import (
    CallerIdentity,
    authenticate,
    create_access_token,
    decode_token,
    get_password_hash,
    verify_password,
)

__all__ = [
    "Settings",
    "settings",
    "get_settings",
    "Base",
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "CallerIdentity",
    "authenticate",
    "create_access_token",
    "decode_token",
    "get_password_hash",
    "verify_password",
]
