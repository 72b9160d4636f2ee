"""
Feedback Service - ratings, comments, likes and aggregate statistics
"""
import logging
import math
from typing import Iterable, List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm.attributes import flag_modified

from app.core.exceptions import NotFoundError
from app.models.feedback import Feedback, FeedbackCategory
from app.models.trip import Trip
from app.models.user import User
from app.schemas.trip import Destination
from app.schemas.feedback import (
    FeedbackCreate,
    FeedbackRead,
    FeedbackTripSummary,
    FeedbackUpdate,
    FeedbackStats,
    CategoryStats,
    Pagination,
)

logger = logging.getLogger(__name__)


class FeedbackService:
    """Manages feedback CRUD, like toggling and rating statistics"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def to_read(self, items: Iterable[Feedback]) -> List[FeedbackRead]:
        """
        Response models with the author's name and a summary of the reviewed trip

        Authors and trips are fetched in one query each for the whole batch.
        """
        items = list(items)
        user_ids = {f.user_id for f in items}
        trip_ids = {f.trip_id for f in items if f.trip_id is not None}

        names = {}
        if user_ids:
            rows = await self.db.execute(select(User.id, User.name).where(User.id.in_(user_ids)))
            names = dict(rows.all())

        trips = {}
        if trip_ids:
            result = await self.db.execute(select(Trip).where(Trip.id.in_(trip_ids)))
            trips = {
                t.id: FeedbackTripSummary(
                    id=t.id,
                    destination=Destination(
                        city=t.city,
                        country=t.country,
                        latitude=t.latitude,
                        longitude=t.longitude,
                    ),
                    start_date=t.start_date,
                    end_date=t.end_date,
                    trip_type=t.trip_type,
                )
                for t in result.scalars().all()
            }

        return [
            FeedbackRead.model_validate(f).model_copy(
                update={"author_name": names.get(f.user_id), "trip": trips.get(f.trip_id)}
            )
            for f in items
        ]

    async def create_feedback(self, user_id: int, data: FeedbackCreate) -> Feedback:
        """
        Create feedback, optionally attached to an existing trip

        Raises:
            NotFoundError: ``trip_id`` given but no such trip
        """
        if data.trip_id is not None and await self.db.get(Trip, data.trip_id) is None:
            raise NotFoundError("Trip", {"trip_id": data.trip_id})

        feedback = Feedback(
            user_id=user_id,
            trip_id=data.trip_id,
            rating=data.rating,
            comment=data.comment,
            category=data.category,
            is_public=data.is_public,
            likes=0,
            liked_by=[],
        )
        self.db.add(feedback)
        await self.db.commit()
        await self.db.refresh(feedback)
        return feedback

    async def list_public_feedback(
        self,
        category: Optional[FeedbackCategory] = None,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[Feedback], Pagination]:
        """Public feedback, newest first, one page at a time"""
        conditions = [Feedback.is_public.is_(True)]
        if category:
            conditions.append(Feedback.category == category)

        stmt = (
            select(Feedback)
            .where(*conditions)
            .order_by(Feedback.created_at.desc(), Feedback.likes.desc(), Feedback.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        feedback = list(result.scalars().all())

        total = (await self.db.execute(select(func.count(Feedback.id)).where(*conditions))).scalar() or 0
        pagination = Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit))
        return feedback, pagination

    async def list_user_feedback(self, user_id: int) -> List[Feedback]:
        stmt = (
            select(Feedback)
            .where(Feedback.user_id == user_id)
            .order_by(Feedback.created_at.desc(), Feedback.id.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_trip_feedback(self, trip_id: int) -> List[Feedback]:
        stmt = (
            select(Feedback)
            .where(Feedback.trip_id == trip_id, Feedback.is_public.is_(True))
            .order_by(Feedback.created_at.desc(), Feedback.likes.desc(), Feedback.id.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_user_feedback(self, feedback_id: int, user_id: int) -> Optional[Feedback]:
        stmt = select(Feedback).where(Feedback.id == feedback_id, Feedback.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def update_feedback(
        self, feedback_id: int, user_id: int, data: FeedbackUpdate
    ) -> Optional[Feedback]:
        """Apply the provided fields to the author's own feedback"""
        feedback = await self.get_user_feedback(feedback_id, user_id)
        if not feedback:
            return None

        for field, value in data.model_dump(exclude_none=True).items():
            setattr(feedback, field, value)

        await self.db.commit()
        await self.db.refresh(feedback)
        return feedback

    async def delete_feedback(self, feedback_id: int, user_id: int) -> bool:
        feedback = await self.get_user_feedback(feedback_id, user_id)
        if not feedback:
            return False

        await self.db.delete(feedback)
        await self.db.commit()
        return True

    async def toggle_like(self, feedback_id: int, user_id: int) -> Tuple[bool, int]:
        """
        Like or unlike feedback for a user

        A user id appears in ``liked_by`` at most once; the count never
        drops below zero.

        Returns:
            ``(liked, likes)`` after the toggle
        """
        feedback = await self.db.get(Feedback, feedback_id)
        if feedback is None:
            raise NotFoundError("Feedback", {"feedback_id": feedback_id})

        liked_by = list(feedback.liked_by or [])
        if user_id in liked_by:
            liked_by = [uid for uid in liked_by if uid != user_id]
            feedback.likes = max(0, feedback.likes - 1)
            liked = False
        else:
            liked_by.append(user_id)
            feedback.likes += 1
            liked = True

        feedback.liked_by = liked_by
        flag_modified(feedback, "liked_by")
        await self.db.commit()
        return liked, feedback.likes

    async def get_stats(self) -> FeedbackStats:
        """Count, average rating and total likes per category, plus global figures"""
        stmt = (
            select(
                Feedback.category,
                func.count(Feedback.id),
                func.avg(Feedback.rating),
                func.sum(Feedback.likes),
            )
            .group_by(Feedback.category)
            .order_by(func.count(Feedback.id).desc())
        )
        rows = (await self.db.execute(stmt)).all()
        by_category = [
            CategoryStats(
                category=category,
                count=count,
                average_rating=float(average or 0),
                total_likes=int(likes or 0),
            )
            for category, count, average, likes in rows
        ]

        total = (await self.db.execute(select(func.count(Feedback.id)))).scalar() or 0
        public = (
            await self.db.execute(select(func.count(Feedback.id)).where(Feedback.is_public.is_(True)))
        ).scalar() or 0
        average = (await self.db.execute(select(func.avg(Feedback.rating)))).scalar()

        return FeedbackStats(
            by_category=by_category,
            total=total,
            public=public,
            average_rating=float(average or 0),
        )

    async def top_rated(self, limit: int = 10) -> List[Feedback]:
        stmt = (
            select(Feedback)
            .where(Feedback.is_public.is_(True), Feedback.rating >= 4)
            .order_by(Feedback.rating.desc(), Feedback.likes.desc(), Feedback.created_at.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def recent(self, limit: int = 10) -> List[Feedback]:
        stmt = (
            select(Feedback)
            .where(Feedback.is_public.is_(True))
            .order_by(Feedback.created_at.desc(), Feedback.id.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
