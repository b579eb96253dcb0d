"""
Registration, login and profile lookup.
"""
from typing import Optional

from agroconnect.core.config import Settings
from agroconnect.core.security import (
    CallerIdentity,
    create_access_token,
    get_password_hash,
    verify_password,
)
from agroconnect.error_handlers import AuthenticationError, ResourceNotFoundError
from agroconnect.logging_config import get_logger
from agroconnect.schemas.user import UserCreate
from agroconnect.storage import EntityKind, EntityStore, UserRecord

logger = get_logger("accounts")


def register_user(store: EntityStore, data: UserCreate, settings: Settings) -> tuple[UserRecord, str]:
    """
    Create an account and issue its first token.

    Raises:
        DuplicateKeyError: the email is already registered
    """
    values = data.model_dump(exclude={"password"})
    values["password_hash"] = get_password_hash(data.password, settings)
    values["verified"] = False

    user = store.insert(EntityKind.USERS, values)
    logger.info(f"Registered {user.account_type} account {user.id}")

    return user, create_access_token(user.id, user.email, settings)


def login_user(store: EntityStore, email: str, password: str, settings: Settings) -> tuple[UserRecord, str]:
    """
    Check credentials and issue a token.

    Raises:
        AuthenticationError: unknown email or wrong password (indistinguishable)
    """
    user: Optional[UserRecord] = store.get_by_unique_key(EntityKind.USERS, "email", email)

    if user is None or not verify_password(password, user.password_hash, settings):
        logger.warning("Failed login attempt")
        raise AuthenticationError(AuthenticationError.CREDENTIALS)

    return user, create_access_token(user.id, user.email, settings)


def get_profile(store: EntityStore, caller: CallerIdentity) -> UserRecord:
    """Resolve the caller's full user record."""
    user = store.get(EntityKind.USERS, caller.id)
    if user is None:
        raise ResourceNotFoundError("User", caller.id)
    return user
