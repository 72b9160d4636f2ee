"""
Packing list API endpoints - checklist tree, item toggling and AI suggestions

Every route resolves the trip through ``get_owned_trip``: 404 for an unknown
trip, 403 when the session user is not the owner.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.dependencies import get_owned_trip, get_suggestion_client
from app.models.trip import Trip
from app.schemas.base import envelope
from app.schemas.packing import PackingListRead, CategoryCreate, ItemCreate, ItemUpdate
from app.services.packing_service import PackingService
from app.services.suggestion_client import PackingSuggestionClient

router = APIRouter(prefix="/api/packing", tags=["packing"])


def _read(packing_list) -> PackingListRead:
    return PackingListRead.model_validate(packing_list)


@router.post("/trip/{trip_id}", status_code=status.HTTP_201_CREATED)
async def create_packing_list(
    trip: Trip = Depends(get_owned_trip),
    db: AsyncSession = Depends(get_db),
):
    """
    Create an empty packing list for a trip

    Answers 409 when the trip already has one.
    """
    packing_list = await PackingService(db).create_packing_list(trip)
    return envelope("Packing list created successfully", packing_list=_read(packing_list))


@router.get("/trip/{trip_id}")
async def get_packing_list(
    trip: Trip = Depends(get_owned_trip),
    db: AsyncSession = Depends(get_db),
):
    packing_list = await PackingService(db).get_packing_list(trip)
    return envelope(packing_list=_read(packing_list))


@router.post("/trip/{trip_id}/ai-generate")
async def generate_ai_packing_list(
    trip: Trip = Depends(get_owned_trip),
    db: AsyncSession = Depends(get_db),
    suggestion_client: PackingSuggestionClient = Depends(get_suggestion_client),
):
    """
    Ask the text-generation provider for categories and append them

    Creates the packing list when the trip has none. Provider failures
    answer 502, a missing API key 503.
    """
    packing_list = await PackingService(db).generate_ai_packing_list(trip, suggestion_client)
    return envelope("AI packing suggestions generated successfully", packing_list=_read(packing_list))


@router.post("/trip/{trip_id}/category")
async def add_category(
    payload: CategoryCreate,
    trip: Trip = Depends(get_owned_trip),
    db: AsyncSession = Depends(get_db),
):
    packing_list = await PackingService(db).add_category(trip, payload.name)
    return envelope("Category added successfully", packing_list=_read(packing_list))


@router.delete("/trip/{trip_id}/category/{category_id}")
async def delete_category(
    category_id: str,
    trip: Trip = Depends(get_owned_trip),
    db: AsyncSession = Depends(get_db),
):
    packing_list = await PackingService(db).delete_category(trip, category_id)
    return envelope("Category deleted successfully", packing_list=_read(packing_list))


@router.post("/trip/{trip_id}/category/{category_id}/item")
async def add_item(
    category_id: str,
    payload: ItemCreate,
    trip: Trip = Depends(get_owned_trip),
    db: AsyncSession = Depends(get_db),
):
    packing_list = await PackingService(db).add_item(trip, category_id, payload)
    return envelope("Item added successfully", packing_list=_read(packing_list))


@router.patch("/trip/{trip_id}/category/{category_id}/item/{item_id}/toggle")
async def toggle_item_packed(
    category_id: str,
    item_id: str,
    trip: Trip = Depends(get_owned_trip),
    db: AsyncSession = Depends(get_db),
):
    packing_list, item = await PackingService(db).toggle_item_packed(trip, category_id, item_id)
    state = "packed" if item.packed else "unpacked"
    return envelope(f"Item marked as {state}", packing_list=_read(packing_list))


@router.put("/trip/{trip_id}/category/{category_id}/item/{item_id}")
async def update_item(
    category_id: str,
    item_id: str,
    payload: ItemUpdate,
    trip: Trip = Depends(get_owned_trip),
    db: AsyncSession = Depends(get_db),
):
    """
    Update name, quantity or priority; omitted fields are left as they are
    """
    packing_list = await PackingService(db).update_item(trip, category_id, item_id, payload)
    return envelope("Item updated successfully", packing_list=_read(packing_list))


@router.delete("/trip/{trip_id}/category/{category_id}/item/{item_id}")
async def delete_item(
    category_id: str,
    item_id: str,
    trip: Trip = Depends(get_owned_trip),
    db: AsyncSession = Depends(get_db),
):
    packing_list = await PackingService(db).delete_item(trip, category_id, item_id)
    return envelope("Item deleted successfully", packing_list=_read(packing_list))
