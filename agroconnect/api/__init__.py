"""API Router."""
from fastapi import APIRouter
from slowapi import Limiter

from agroconnect.api import auth, products, messages, stats, users, weather


def build_api_router(limiter: Limiter, auth_limit: str) -> APIRouter:
    """All ``/api`` routes for one application instance."""
    api_router = APIRouter(prefix="/api")

    # Include all route modules
    api_router.include_router(auth.build_router(limiter, auth_limit))
    api_router.include_router(products.router)
    api_router.include_router(messages.router)
    api_router.include_router(stats.router)
    api_router.include_router(users.router)
    api_router.include_router(weather.router)

    return api_router


__all__ = ["build_api_router"]
