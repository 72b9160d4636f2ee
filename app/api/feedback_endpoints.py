"""
Feedback API endpoints - ratings, likes and statistics
"""
from typing import Optional
from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.dependencies import get_current_user
from app.core.exceptions import NotFoundError
from app.models.feedback import FeedbackCategory
from app.models.user import User
from app.schemas.base import envelope
from app.schemas.feedback import FeedbackCreate, FeedbackUpdate
from app.services.feedback_service import FeedbackService

router = APIRouter(prefix="/api/feedback", tags=["feedback"])


@router.get("/public")
async def list_public_feedback(
    category: Optional[FeedbackCategory] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    service = FeedbackService(db)
    feedback, pagination = await service.list_public_feedback(category, page, limit)
    return envelope(feedback=await service.to_read(feedback), pagination=pagination)


@router.get("/trip/{trip_id}")
async def list_trip_feedback(trip_id: int, db: AsyncSession = Depends(get_db)):
    service = FeedbackService(db)
    feedback = await service.list_trip_feedback(trip_id)
    return envelope(feedback=await service.to_read(feedback))


@router.get("/stats")
async def get_feedback_stats(db: AsyncSession = Depends(get_db)):
    """
    Per-category count, average rating and total likes, plus overall figures
    """
    stats = await FeedbackService(db).get_stats()
    return envelope(stats=stats)


@router.get("/top-rated")
async def get_top_rated_feedback(
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    service = FeedbackService(db)
    feedback = await service.top_rated(limit)
    return envelope(feedback=await service.to_read(feedback))


@router.get("/recent")
async def get_recent_feedback(
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    service = FeedbackService(db)
    feedback = await service.recent(limit)
    return envelope(feedback=await service.to_read(feedback))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_feedback(
    payload: FeedbackCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    service = FeedbackService(db)
    feedback = await service.create_feedback(current_user.id, payload)
    [read] = await service.to_read([feedback])
    return envelope("Feedback created successfully", feedback=read)


@router.get("/my-feedback")
async def list_my_feedback(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    service = FeedbackService(db)
    feedback = await service.list_user_feedback(current_user.id)
    return envelope(feedback=await service.to_read(feedback))


@router.put("/{feedback_id}")
async def update_feedback(
    feedback_id: int,
    payload: FeedbackUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    service = FeedbackService(db)
    feedback = await service.update_feedback(feedback_id, current_user.id, payload)
    if not feedback:
        raise NotFoundError("Feedback", {"feedback_id": feedback_id})
    [read] = await service.to_read([feedback])
    return envelope("Feedback updated successfully", feedback=read)


@router.delete("/{feedback_id}")
async def delete_feedback(
    feedback_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not await FeedbackService(db).delete_feedback(feedback_id, current_user.id):
        raise NotFoundError("Feedback", {"feedback_id": feedback_id})
    return envelope("Feedback deleted successfully")


@router.patch("/{feedback_id}/like")
async def toggle_feedback_like(
    feedback_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    liked, likes = await FeedbackService(db).toggle_like(feedback_id, current_user.id)
    return envelope("Feedback liked" if liked else "Feedback unliked", liked=liked, likes=likes)
