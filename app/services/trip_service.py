"""
Trip Service - Manages trip lifecycle, weather caching and AI trip insights
"""
import logging
from datetime import date
from typing import Dict, Iterable, Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete

from app.core.exceptions import NotFoundError, ForbiddenError, ValidationFailedError
from app.models.trip import Trip
from app.models.packing_list import PackingList
from app.schemas.trip import TripCreate, TripUpdate
from app.services.weather_client import WeatherClient
from app.services.suggestion_client import PackingSuggestionClient

logger = logging.getLogger(__name__)


def compute_duration(start_date: date, end_date: date) -> int:
    """Trip length in days (end minus start)."""
    return (end_date - start_date).days


class TripService:
    """Manages trip CRUD operations and provider-backed enrichments"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_trip(self, user_id: int, trip_data: TripCreate) -> Trip:
        """
        Create a new trip for a user

        Args:
            user_id: Owner user ID
            trip_data: Trip creation data

        Returns:
            Created trip with its duration computed
        """
        trip = Trip(
            user_id=user_id,
            city=trip_data.destination.city,
            country=trip_data.destination.country,
            latitude=trip_data.destination.latitude,
            longitude=trip_data.destination.longitude,
            start_date=trip_data.start_date,
            end_date=trip_data.end_date,
            duration=compute_duration(trip_data.start_date, trip_data.end_date),
            trip_type=trip_data.trip_type,
            attractions=[a.model_dump() for a in trip_data.attractions],
            weather_forecast=[],
            is_public=trip_data.is_public,
        )
        self.db.add(trip)
        await self.db.commit()
        await self.db.refresh(trip)
        logger.info(f"Created trip {trip.id} for user {user_id}")
        return trip

    async def get_trip(self, trip_id: int, user_id: int) -> Optional[Trip]:
        """
        Get a trip by ID (scoped to user)

        Returns:
            Trip or None when missing or owned by someone else
        """
        stmt = select(Trip).where(
            Trip.id == trip_id,
            Trip.user_id == user_id
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_owned_trip(self, trip_id: int, user_id: int) -> Trip:
        """
        Get a trip the user must own, telling missing and foreign trips apart

        Raises:
            NotFoundError: no such trip
            ForbiddenError: trip belongs to another user
        """
        trip = await self.db.get(Trip, trip_id)
        if trip is None:
            raise NotFoundError("Trip", {"trip_id": trip_id})
        if trip.user_id != user_id:
            raise ForbiddenError("Access denied", {"trip_id": trip_id})
        return trip

    async def list_user_trips(self, user_id: int) -> List[Trip]:
        """List user's trips, newest first"""
        stmt = (
            select(Trip)
            .where(Trip.user_id == user_id)
            .order_by(Trip.created_at.desc(), Trip.id.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_public_trips(self, limit: int = 20) -> List[Trip]:
        """List trips shared publicly, newest first"""
        stmt = (
            select(Trip)
            .where(Trip.is_public.is_(True))
            .order_by(Trip.created_at.desc(), Trip.id.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_packing_list_ids(self, trip_ids: Iterable[int]) -> Dict[int, int]:
        """Map each trip id that has a packing list to that list's id"""
        ids = list(trip_ids)
        if not ids:
            return {}
        stmt = select(PackingList.trip_id, PackingList.id).where(PackingList.trip_id.in_(ids))
        result = await self.db.execute(stmt)
        return {trip_id: packing_list_id for trip_id, packing_list_id in result.all()}

    async def update_trip(
        self,
        trip_id: int,
        user_id: int,
        trip_data: TripUpdate
    ) -> Optional[Trip]:
        """
        Update a trip; duration follows any date change

        Returns:
            Updated trip or None
        """
        trip = await self.get_trip(trip_id, user_id)
        if not trip:
            return None

        update_fields = trip_data.model_dump(exclude_unset=True)
        destination = update_fields.pop("destination", None)
        if destination:
            for field, value in destination.items():
                setattr(trip, field, value)
        for field, value in update_fields.items():
            if value is None:
                continue
            setattr(trip, field, value)

        if trip.end_date < trip.start_date:
            raise ValidationFailedError(
                "end_date must not be before start_date",
                {"start_date": trip.start_date.isoformat(), "end_date": trip.end_date.isoformat()},
            )
        trip.duration = compute_duration(trip.start_date, trip.end_date)

        await self.db.commit()
        await self.db.refresh(trip)
        return trip

    async def delete_trip(self, trip_id: int, user_id: int) -> bool:
        """
        Delete a trip together with its packing list

        Returns:
            False when the trip does not exist for this user
        """
        trip = await self.get_trip(trip_id, user_id)
        if not trip:
            return False

        await self.db.execute(delete(PackingList).where(PackingList.trip_id == trip.id))
        await self.db.delete(trip)
        await self.db.commit()
        logger.info(f"Deleted trip {trip_id} and its packing list")
        return True

    async def toggle_visibility(self, trip_id: int, user_id: int) -> Optional[Trip]:
        trip = await self.get_trip(trip_id, user_id)
        if not trip:
            return None

        trip.is_public = not trip.is_public
        await self.db.commit()
        await self.db.refresh(trip)
        return trip

    async def refresh_weather(
        self,
        trip_id: int,
        user_id: int,
        weather_client: WeatherClient
    ) -> Optional[Trip]:
        """
        Fetch the destination forecast and cache it on the trip

        Returns:
            Trip with ``weather_forecast`` replaced, or None
        """
        trip = await self.get_trip(trip_id, user_id)
        if not trip:
            return None

        trip.weather_forecast = await weather_client.get_forecast(trip.city, trip.country)
        await self.db.commit()
        await self.db.refresh(trip)
        return trip

    async def generate_ai_suggestions(
        self,
        trip_id: int,
        user_id: int,
        suggestion_client: PackingSuggestionClient
    ) -> Optional[Trip]:
        """Store free-text packing, tips and attractions suggestions on the trip"""
        trip = await self.get_trip(trip_id, user_id)
        if not trip:
            return None

        trip.ai_suggestions = await suggestion_client.suggest_trip_insights(trip)
        await self.db.commit()
        await self.db.refresh(trip)
        return trip
