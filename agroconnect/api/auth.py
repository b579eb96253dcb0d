"""
Authentication API endpoints for registration, login and the caller's profile.
"""
from fastapi import APIRouter, Depends, Request, status
from slowapi import Limiter

from agroconnect.api.deps import get_app_settings, get_caller, get_store
from agroconnect.core.config import Settings
from agroconnect.core.security import CallerIdentity
from agroconnect.schemas.user import AuthResponse, LoginRequest, UserCreate, UserResponse
from agroconnect.services.accounts import get_profile, login_user, register_user
from agroconnect.storage import EntityStore


def build_router(limiter: Limiter, auth_limit: str) -> APIRouter:
    """Auth routes with login/register throttled by the application's own limiter."""
    router = APIRouter(prefix="/auth", tags=["Authentication"])

    @router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
    @limiter.limit(auth_limit)
    def register(
        request: Request,
        user_data: UserCreate,
        store: EntityStore = Depends(get_store),
        settings: Settings = Depends(get_app_settings)
    ):
        """
        Register a new farmer or buyer account.

        - **email**: Valid email address, unique
        - **password**: Minimum 8 characters
        - **accountType**: `farmer` or `buyer`
        """
        user, token = register_user(store, user_data, settings)
        return AuthResponse(user=UserResponse.model_validate(user), token=token)

    @router.post("/login", response_model=AuthResponse)
    @limiter.limit(auth_limit)
    def login(
        request: Request,
        credentials: LoginRequest,
        store: EntityStore = Depends(get_store),
        settings: Settings = Depends(get_app_settings)
    ):
        """Authenticate with email and password and receive a bearer token."""
        user, token = login_user(store, credentials.email, credentials.password, settings)
        return AuthResponse(user=UserResponse.model_validate(user), token=token)

    @router.get("/me", response_model=UserResponse)
    def get_current_user_info(
        caller: CallerIdentity = Depends(get_caller),
        store: EntityStore = Depends(get_store)
    ):
        """
        Get current authenticated user's profile information.

        Requires valid access token in Authorization header.
        """
        return UserResponse.model_validate(get_profile(store, caller))

    return router
