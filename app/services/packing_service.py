"""
Packing Service - persists packing lists and applies packing engine mutations

Each mutation loads the trip's list document, applies one engine operation
and writes the whole document back (last write wins).
"""
import logging
from typing import Iterable, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.attributes import flag_modified

from app.core.exceptions import ConflictError, NotFoundError
from app.models.packing_list import PackingList
from app.models.trip import Trip
from app.schemas.packing import ItemCreate, ItemUpdate, SuggestedCategory
from app.services.packing_engine import PackingItem, PackingTree
from app.services.suggestion_client import PackingSuggestionClient

logger = logging.getLogger(__name__)


class PackingService:
    """Packing list CRUD for trips the caller already owns"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _find(self, trip: Trip) -> Optional[PackingList]:
        stmt = select(PackingList).where(PackingList.trip_id == trip.id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def _load(self, trip: Trip) -> Tuple[PackingList, PackingTree]:
        packing_list = await self._find(trip)
        if packing_list is None:
            raise NotFoundError("Packing list", {"trip_id": trip.id})
        return packing_list, PackingTree.from_document(packing_list.categories)

    async def _save(self, packing_list: PackingList, tree: PackingTree) -> PackingList:
        packing_list.categories = tree.to_document()
        packing_list.completion_percentage = tree.completion_percentage
        flag_modified(packing_list, "categories")
        await self.db.commit()
        await self.db.refresh(packing_list)
        return packing_list

    async def create_packing_list(self, trip: Trip) -> PackingList:
        """
        Create an empty packing list for a trip

        Raises:
            ConflictError: the trip already has a list, including one created
                by a concurrent request after the existence check
        """
        trip_id = trip.id
        if await self._find(trip) is not None:
            raise ConflictError(
                "Packing list already exists for this trip", {"trip_id": trip_id}
            )

        packing_list = PackingList(trip_id=trip_id, categories=[], completion_percentage=0)
        self.db.add(packing_list)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(f"Concurrent packing list create for trip {trip_id}")
            raise ConflictError(
                "Packing list already exists for this trip", {"trip_id": trip_id}
            )
        await self.db.refresh(packing_list)
        logger.info(f"Created packing list {packing_list.id} for trip {trip_id}")
        return packing_list

    async def get_packing_list(self, trip: Trip) -> PackingList:
        packing_list, _ = await self._load(trip)
        return packing_list

    async def add_category(self, trip: Trip, name: str) -> PackingList:
        packing_list, tree = await self._load(trip)
        tree.add_category(name)
        return await self._save(packing_list, tree)

    async def delete_category(self, trip: Trip, category_id: str) -> PackingList:
        packing_list, tree = await self._load(trip)
        tree.delete_category(category_id)
        return await self._save(packing_list, tree)

    async def add_item(self, trip: Trip, category_id: str, item_data: ItemCreate) -> PackingList:
        packing_list, tree = await self._load(trip)
        tree.add_item(
            category_id,
            item_data.name,
            quantity=item_data.quantity,
            priority=item_data.priority,
        )
        return await self._save(packing_list, tree)

    async def toggle_item_packed(
        self, trip: Trip, category_id: str, item_id: str
    ) -> Tuple[PackingList, PackingItem]:
        packing_list, tree = await self._load(trip)
        item = tree.toggle_item_packed(category_id, item_id)
        return await self._save(packing_list, tree), item

    async def update_item(
        self, trip: Trip, category_id: str, item_id: str, item_data: ItemUpdate
    ) -> PackingList:
        packing_list, tree = await self._load(trip)
        tree.update_item(
            category_id,
            item_id,
            name=item_data.name,
            quantity=item_data.quantity,
            priority=item_data.priority,
        )
        return await self._save(packing_list, tree)

    async def delete_item(self, trip: Trip, category_id: str, item_id: str) -> PackingList:
        packing_list, tree = await self._load(trip)
        tree.delete_item(category_id, item_id)
        return await self._save(packing_list, tree)

    async def merge_ai_suggestions(
        self, trip: Trip, suggested_categories: Iterable[SuggestedCategory]
    ) -> PackingList:
        """
        Append suggested categories, creating the list first when the trip has none
        """
        packing_list = await self._find(trip)
        if packing_list is None:
            packing_list = PackingList(trip_id=trip.id, categories=[], completion_percentage=0)
            self.db.add(packing_list)

        tree = PackingTree.from_document(packing_list.categories)
        added = tree.merge_suggestions(suggested_categories)
        logger.info(f"Merged {len(added)} suggested categories into packing list for trip {trip.id}")
        return await self._save(packing_list, tree)

    async def generate_ai_packing_list(
        self, trip: Trip, suggestion_client: PackingSuggestionClient
    ) -> PackingList:
        suggestions = await suggestion_client.suggest_packing_list(trip)
        return await self.merge_ai_suggestions(trip, suggestions.categories)
