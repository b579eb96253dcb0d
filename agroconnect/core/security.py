"""
Security utilities for authentication and authorization.
Handles JWT tokens, password hashing and caller verification.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Any

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from agroconnect.core.config import Settings, get_settings
from agroconnect.error_handlers import AuthenticationError
from agroconnect.logging_config import get_logger

logger = get_logger("security")


@dataclass(frozen=True)
class CallerIdentity:
    """Who is making the request, as established by a verified token."""
    id: str
    email: str


_contexts: dict[int, CryptContext] = {}


def _pwd_context(settings: Settings) -> CryptContext:
    rounds = settings.bcrypt_rounds
    if rounds not in _contexts:
        _contexts[rounds] = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)
    return _contexts[rounds]


def verify_password(plain_password: str, hashed_password: str, settings: Optional[Settings] = None) -> bool:
    """Verify a password against its hash."""
    return _pwd_context(settings or get_settings()).verify(plain_password, hashed_password)


def get_password_hash(password: str, settings: Optional[Settings] = None) -> str:
    """Hash a password using bcrypt."""
    return _pwd_context(settings or get_settings()).hash(password)


def create_access_token(
    user_id: str,
    email: str,
    settings: Optional[Settings] = None,
    expires_delta: Optional[timedelta] = None,
    additional_claims: Optional[dict[str, Any]] = None
) -> str:
    """
    Create a JWT access token binding a user id and email.

    Args:
        user_id: User identifier, stored as ``sub``
        email: User email
        settings: Settings providing secret, algorithm and default lifetime
        expires_delta: Token expiration time
        additional_claims: Extra data to include in token

    Returns:
        Encoded JWT token string
    """
    settings = settings or get_settings()
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_access_token_expire_minutes)

    to_encode = {
        "sub": str(user_id),
        "email": email,
        "type": "access",
        "iat": now,
        "exp": now + expires_delta,
    }

    if additional_claims:
        to_encode.update(additional_claims)

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def decode_token(token: str, settings: Optional[Settings] = None) -> dict[str, Any]:
    """
    Decode and verify a JWT token.

    Raises:
        AuthenticationError: If the signature is bad or the token has expired
    """
    settings = settings or get_settings()
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm]
        )
    except ExpiredSignatureError:
        raise AuthenticationError(AuthenticationError.EXPIRED)
    except JWTError:
        raise AuthenticationError(AuthenticationError.INVALID)


def authenticate(token: Optional[str], settings: Optional[Settings] = None) -> CallerIdentity:
    """
    Turn a presented bearer token into the caller's identity.

    Verification is stateless: the user record is not re-read, so a token
    stays valid until it expires even if the account changes meanwhile.

    Raises:
        AuthenticationError: reason ``missing``, ``invalid`` or ``expired``
    """
    if not token:
        raise AuthenticationError(AuthenticationError.MISSING)

    payload = decode_token(token, settings)

    user_id = payload.get("sub")
    email = payload.get("email")
    if not user_id or not email:
        raise AuthenticationError(AuthenticationError.INVALID, "Invalid authentication credentials")

    # Verify token type
    if payload.get("type", "access") != "access":
        raise AuthenticationError(AuthenticationError.INVALID, "Invalid token type. Access token required.")

    return CallerIdentity(id=user_id, email=email)
