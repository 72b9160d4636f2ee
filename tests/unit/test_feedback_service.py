"""
Unit tests for feedback CRUD, likes and statistics
"""
import pytest

from app.core.exceptions import NotFoundError
from app.models.feedback import FeedbackCategory
from app.schemas.feedback import FeedbackCreate, FeedbackUpdate
from app.services.feedback_service import FeedbackService


@pytest.mark.asyncio
async def test_create_feedback_defaults(db_session, test_user):
    feedback = await FeedbackService(db_session).create_feedback(
        test_user.id, FeedbackCreate(rating=5, comment="Great packing tips")
    )

    assert feedback.category == FeedbackCategory.OVERALL
    assert feedback.is_public is True
    assert feedback.likes == 0
    assert feedback.liked_by == []


@pytest.mark.asyncio
async def test_create_feedback_for_unknown_trip_raises(db_session, test_user):
    with pytest.raises(NotFoundError):
        await FeedbackService(db_session).create_feedback(test_user.id, FeedbackCreate(rating=3, trip_id=424242))


@pytest.mark.asyncio
async def test_toggle_like_adds_and_removes_user_once(db_session, test_user, other_user):
    service = FeedbackService(db_session)
    feedback = await service.create_feedback(test_user.id, FeedbackCreate(rating=4))

    assert await service.toggle_like(feedback.id, other_user.id) == (True, 1)
    assert await service.toggle_like(feedback.id, test_user.id) == (True, 2)
    assert await service.toggle_like(feedback.id, other_user.id) == (False, 1)

    await db_session.refresh(feedback)
    assert feedback.liked_by == [test_user.id]


@pytest.mark.asyncio
async def test_toggle_like_on_missing_feedback_raises(db_session, test_user):
    with pytest.raises(NotFoundError):
        await FeedbackService(db_session).toggle_like(1234, test_user.id)


@pytest.mark.asyncio
async def test_update_and_delete_are_author_only(db_session, test_user, other_user):
    service = FeedbackService(db_session)
    feedback = await service.create_feedback(test_user.id, FeedbackCreate(rating=2, comment="meh"))

    assert await service.update_feedback(feedback.id, other_user.id, FeedbackUpdate(rating=1)) is None
    assert await service.delete_feedback(feedback.id, other_user.id) is False

    updated = await service.update_feedback(feedback.id, test_user.id, FeedbackUpdate(rating=4))
    assert updated.rating == 4
    assert updated.comment == "meh"
    assert await service.delete_feedback(feedback.id, test_user.id) is True


@pytest.mark.asyncio
async def test_public_listing_filters_and_paginates(db_session, test_user, test_trip):
    service = FeedbackService(db_session)
    for rating in (5, 4, 3):
        await service.create_feedback(
            test_user.id,
            FeedbackCreate(rating=rating, category=FeedbackCategory.WEATHER_ACCURACY, trip_id=test_trip.id),
        )
    await service.create_feedback(test_user.id, FeedbackCreate(rating=1, is_public=False, trip_id=test_trip.id))
    await service.create_feedback(test_user.id, FeedbackCreate(rating=2, category=FeedbackCategory.OTHER))

    page, pagination = await service.list_public_feedback(FeedbackCategory.WEATHER_ACCURACY, page=1, limit=2)
    assert len(page) == 2
    assert (pagination.total, pagination.pages) == (3, 2)

    everything, pagination = await service.list_public_feedback()
    assert pagination.total == 4
    assert all(f.is_public for f in everything)

    assert len(await service.list_trip_feedback(test_trip.id)) == 3
    assert len(await service.list_user_feedback(test_user.id)) == 5


@pytest.mark.asyncio
async def test_stats_top_rated_and_recent(db_session, test_user):
    service = FeedbackService(db_session)
    await service.create_feedback(test_user.id, FeedbackCreate(rating=5, category=FeedbackCategory.ATTRACTIONS))
    await service.create_feedback(test_user.id, FeedbackCreate(rating=3, category=FeedbackCategory.ATTRACTIONS))
    await service.create_feedback(test_user.id, FeedbackCreate(rating=4, is_public=False))

    stats = await service.get_stats()
    assert stats.total == 3
    assert stats.public == 2
    assert stats.average_rating == pytest.approx(4.0)
    attractions = next(s for s in stats.by_category if s.category == FeedbackCategory.ATTRACTIONS)
    assert attractions.count == 2
    assert attractions.average_rating == pytest.approx(4.0)

    top = await service.top_rated()
    assert [f.rating for f in top] == [5]
    assert len(await service.recent(limit=1)) == 1


@pytest.mark.asyncio
async def test_read_models_carry_author_and_trip(db_session, test_user, other_user, test_trip):
    service = FeedbackService(db_session)
    on_trip = await service.create_feedback(test_user.id, FeedbackCreate(rating=5, trip_id=test_trip.id))
    general = await service.create_feedback(other_user.id, FeedbackCreate(rating=4))

    first, second = await service.to_read([on_trip, general])

    assert first.author_name == "Test Traveler"
    assert first.trip.id == test_trip.id
    assert first.trip.destination.city == "Lisbon"
    assert first.trip.trip_type == test_trip.trip_type
    assert second.author_name == "Other Traveler"
    assert second.trip is None
    assert await service.to_read([]) == []
