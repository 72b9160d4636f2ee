from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import List, Optional

from app.models.feedback import FeedbackCategory
from app.models.trip import TripType
from app.schemas.trip import Destination


class FeedbackCreate(BaseModel):
    trip_id: Optional[int] = None
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field("", max_length=1000)
    category: FeedbackCategory = FeedbackCategory.OVERALL
    is_public: bool = True


class FeedbackUpdate(BaseModel):
    rating: Optional[int] = Field(None, ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=1000)
    category: Optional[FeedbackCategory] = None
    is_public: Optional[bool] = None


class FeedbackTripSummary(BaseModel):
    """The reviewed trip as shown next to its feedback"""
    id: int
    destination: Destination
    start_date: date
    end_date: date
    trip_type: TripType


class FeedbackRead(BaseModel):
    id: int
    user_id: int
    trip_id: Optional[int]
    rating: int
    comment: str
    category: FeedbackCategory
    is_public: bool
    likes: int
    liked_by: List[int] = []
    created_at: datetime
    updated_at: datetime
    author_name: Optional[str] = None
    trip: Optional[FeedbackTripSummary] = None

    class Config:
        from_attributes = True


class CategoryStats(BaseModel):
    category: FeedbackCategory
    count: int
    average_rating: float
    total_likes: int


class FeedbackStats(BaseModel):
    by_category: List[CategoryStats]
    total: int
    public: int
    average_rating: float


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int
