"""
Trip schemas for API requests/responses
"""
from pydantic import BaseModel, Field, model_validator
from datetime import date, datetime
from typing import List, Optional

from app.models.trip import Trip, TripType


class Destination(BaseModel):
    city: str = Field(..., min_length=1, max_length=120)
    country: str = Field(..., min_length=1, max_length=120)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class Attraction(BaseModel):
    name: str
    description: Optional[str] = None
    rating: Optional[float] = None
    category: Optional[str] = None


class Temperature(BaseModel):
    min: float
    max: float


class WeatherDay(BaseModel):
    """One forecast entry as cached on the trip"""
    date: datetime
    temperature: Temperature
    condition: str
    humidity: Optional[float] = None
    wind_speed: Optional[float] = None


class AISuggestions(BaseModel):
    packing_recommendations: str = ""
    travel_tips: str = ""
    local_attractions: str = ""


class TripCreate(BaseModel):
    """Schema for creating a new trip"""
    destination: Destination
    start_date: date
    end_date: date
    trip_type: TripType
    attractions: List[Attraction] = []
    is_public: bool = False

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class TripUpdate(BaseModel):
    """Schema for updating a trip; only provided fields are applied"""
    destination: Optional[Destination] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    trip_type: Optional[TripType] = None
    attractions: Optional[List[Attraction]] = None
    is_public: Optional[bool] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class TripRead(BaseModel):
    """Schema for trip read response"""
    id: int
    user_id: int
    destination: Destination
    start_date: date
    end_date: date
    duration: int
    trip_type: TripType
    weather_forecast: List[WeatherDay] = []
    attractions: List[Attraction] = []
    ai_suggestions: Optional[AISuggestions] = None
    is_public: bool
    packing_list_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_trip(cls, trip: Trip, packing_list_id: Optional[int] = None) -> "TripRead":
        return cls(
            id=trip.id,
            user_id=trip.user_id,
            destination=Destination(
                city=trip.city,
                country=trip.country,
                latitude=trip.latitude,
                longitude=trip.longitude,
            ),
            start_date=trip.start_date,
            end_date=trip.end_date,
            duration=trip.duration,
            trip_type=trip.trip_type,
            weather_forecast=trip.weather_forecast or [],
            attractions=trip.attractions or [],
            ai_suggestions=trip.ai_suggestions,
            is_public=trip.is_public,
            packing_list_id=packing_list_id,
            created_at=trip.created_at,
            updated_at=trip.updated_at,
        )
