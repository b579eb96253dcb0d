"""
Request dependencies: the store, settings and weather client live on
``app.state`` and are handed to handlers from there.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from agroconnect.core.config import Settings
from agroconnect.core.security import CallerIdentity, authenticate
from agroconnect.services.weather import WeatherClient
from agroconnect.storage import EntityStore

# HTTP Bearer token scheme; a missing header is reported by ``authenticate``
security_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> EntityStore:
    return request.app.state.store


def get_weather_client(request: Request) -> WeatherClient:
    return request.app.state.weather_client


def get_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    settings: Settings = Depends(get_app_settings)
) -> CallerIdentity:
    """Require a valid bearer token and return the caller it identifies."""
    token = credentials.credentials if credentials else None
    return authenticate(token, settings)
