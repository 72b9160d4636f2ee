"""
Trip model: destination, dates and the cached weather / AI data for a journey
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Float, Boolean, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
import enum

from app.core.db import Base, JSONType
from app.models.user import _utcnow


class TripType(str, enum.Enum):
    """Kind of trip, used to tailor packing and travel suggestions"""
    BUSINESS = "business"
    LEISURE = "leisure"
    ADVENTURE = "adventure"
    FAMILY = "family"
    SOLO = "solo"


class Trip(Base):
    """
    Trip represents a user's planned journey.
    Owns at most one packing list; deleting the trip deletes the list.
    """
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    city = Column(String(120), nullable=False)
    country = Column(String(120), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False)
    duration = Column(Integer, nullable=False, default=0)
    trip_type = Column(SQLEnum(TripType), nullable=False)
    weather_forecast = Column(JSONType, nullable=False, default=list)
    attractions = Column(JSONType, nullable=False, default=list)
    ai_suggestions = Column(JSONType, nullable=True)
    is_public = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="trips")
    packing_list = relationship(
        "PackingList",
        back_populates="trip",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
