"""
Trip API endpoints - Trip lifecycle, weather and AI trip insights
"""
from typing import List
from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.dependencies import get_current_user, get_weather_client, get_suggestion_client
from app.core.exceptions import NotFoundError
from app.models.user import User
from app.schemas.base import envelope
from app.schemas.trip import TripCreate, TripRead, TripUpdate
from app.services.suggestion_client import PackingSuggestionClient
from app.services.trip_service import TripService
from app.services.weather_client import WeatherClient

router = APIRouter(prefix="/api/trips", tags=["trips"])


def _not_found(trip_id: int) -> NotFoundError:
    return NotFoundError("Trip", {"trip_id": trip_id})


async def _read_trips(service: TripService, trips) -> List[TripRead]:
    packing_list_ids = await service.get_packing_list_ids(t.id for t in trips)
    return [TripRead.from_trip(t, packing_list_ids.get(t.id)) for t in trips]


@router.get("/public")
async def list_public_trips(
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """
    List trips their owners have made public
    """
    service = TripService(db)
    trips = await service.list_public_trips(limit)
    return envelope(trips=await _read_trips(service, trips))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Create a new trip

    - **destination**: city, country and optional coordinates
    - **start_date** / **end_date**: trip dates; duration is derived
    - **trip_type**: business, leisure, adventure, family or solo
    """
    trip = await TripService(db).create_trip(current_user.id, trip_data)
    return envelope("Trip created successfully", trip=TripRead.from_trip(trip))


@router.get("")
async def list_trips(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    service = TripService(db)
    trips = await service.list_user_trips(current_user.id)
    return envelope(trips=await _read_trips(service, trips))


@router.get("/{trip_id}")
async def get_trip(
    trip_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    service = TripService(db)
    trip = await service.get_trip(trip_id, current_user.id)
    if not trip:
        raise _not_found(trip_id)
    [read] = await _read_trips(service, [trip])
    return envelope(trip=read)


@router.put("/{trip_id}")
async def update_trip(
    trip_id: int,
    trip_data: TripUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update a trip

    All fields optional - only provided fields will be updated
    """
    service = TripService(db)
    trip = await service.update_trip(trip_id, current_user.id, trip_data)
    if not trip:
        raise _not_found(trip_id)
    [read] = await _read_trips(service, [trip])
    return envelope("Trip updated successfully", trip=read)


@router.delete("/{trip_id}")
async def delete_trip(
    trip_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Delete a trip and its packing list
    """
    if not await TripService(db).delete_trip(trip_id, current_user.id):
        raise _not_found(trip_id)
    return envelope("Trip deleted successfully")


@router.get("/{trip_id}/weather")
async def get_trip_weather(
    trip_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    weather_client: WeatherClient = Depends(get_weather_client),
):
    """
    Fetch the destination forecast and cache it on the trip
    """
    trip = await TripService(db).refresh_weather(trip_id, current_user.id, weather_client)
    if not trip:
        raise _not_found(trip_id)
    return envelope(weather=TripRead.from_trip(trip).weather_forecast)


@router.post("/{trip_id}/ai-suggestions")
async def generate_ai_suggestions(
    trip_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    suggestion_client: PackingSuggestionClient = Depends(get_suggestion_client),
):
    """
    Generate packing recommendations, travel tips and local attractions
    """
    trip = await TripService(db).generate_ai_suggestions(trip_id, current_user.id, suggestion_client)
    if not trip:
        raise _not_found(trip_id)
    return envelope(ai_suggestions=TripRead.from_trip(trip).ai_suggestions)


@router.patch("/{trip_id}/visibility")
async def toggle_trip_visibility(
    trip_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    trip = await TripService(db).toggle_visibility(trip_id, current_user.id)
    if not trip:
        raise _not_found(trip_id)
    state = "public" if trip.is_public else "private"
    return envelope(f"Trip is now {state}", is_public=trip.is_public)
