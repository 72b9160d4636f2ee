"""
Dependency providers for FastAPI routes: session user, owned trip and
provider adapters built from settings.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import logging
from functools import lru_cache

from app.config.settings import get_settings
from app.core.db import get_db
from app.core.exceptions import AuthenticationError
from app.core.jwt import decode_token
from app.models.trip import Trip
from app.models.user import User
from app.services.suggestion_client import PackingSuggestionClient
from app.services.trip_service import TripService
from app.services.weather_client import WeatherClient


logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Resolve the session user from the session cookie, falling back to a
    Bearer token in the Authorization header.
    """
    token = request.cookies.get(get_settings().security.cookie_name)
    if not token and credentials:
        token = credentials.credentials
    if not token:
        raise AuthenticationError("Not authenticated")

    payload = decode_token(token)
    subject = payload.get("sub") if payload else None
    if not subject or not str(subject).isdigit():
        raise AuthenticationError("Invalid or expired token")

    user = await db.get(User, int(subject))
    if user is None:
        raise AuthenticationError("User no longer exists")

    request.state.user_id = user.id
    return user


async def get_owned_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Trip:
    """
    Trip from the ``trip_id`` path parameter, owned by the session user.

    Resolved before the request body is validated, so a non-owner is
    refused whatever the payload.
    """
    return await TripService(db).get_owned_trip(trip_id, current_user.id)


@lru_cache
def get_weather_client() -> WeatherClient:
    weather = get_settings().weather
    return WeatherClient(
        api_key=weather.api_key,
        api_url=weather.api_url,
        timeout_seconds=weather.timeout_seconds,
    )


@lru_cache
def get_suggestion_client() -> PackingSuggestionClient:
    gemini = get_settings().gemini
    return PackingSuggestionClient(api_key=gemini.api_key, model=gemini.model)
