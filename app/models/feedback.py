from sqlalchemy import Column, Integer, Text, Boolean, DateTime, ForeignKey, Enum as SQLEnum
import enum

from app.core.db import Base, JSONType
from app.models.user import _utcnow


class FeedbackCategory(str, enum.Enum):
    PACKING_SUGGESTIONS = "packing_suggestions"
    WEATHER_ACCURACY = "weather_accuracy"
    ATTRACTIONS = "attractions"
    OVERALL = "overall"
    OTHER = "other"


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="SET NULL"), nullable=True, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False, default="")
    category = Column(SQLEnum(FeedbackCategory), nullable=False, default=FeedbackCategory.OVERALL, index=True)
    is_public = Column(Boolean, nullable=False, default=True, index=True)
    likes = Column(Integer, nullable=False, default=0)
    liked_by = Column(JSONType, nullable=False, default=list)  # user ids, each at most once
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)
