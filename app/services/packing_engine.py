"""
Packing list engine - category/item tree for one trip.

Categories and items live in insertion-ordered maps keyed by generated id,
so lookups by id are direct and order is preserved for display. Every
mutating call recomputes ``completion_percentage`` before returning.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from app.core.exceptions import NotFoundError
from app.models.packing_list import ItemPriority


def _new_id(taken: Dict[str, Any]) -> str:
    """Generate an id that is unused within ``taken``."""
    while True:
        candidate = uuid.uuid4().hex
        if candidate not in taken:
            return candidate


@dataclass
class PackingItem:
    id: str
    name: str
    quantity: int = 1
    packed: bool = False
    priority: ItemPriority = ItemPriority.IMPORTANT
    ai_suggested: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "packed": self.packed,
            "priority": self.priority.value,
            "ai_suggested": self.ai_suggested,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PackingItem":
        return cls(
            id=data["id"],
            name=data["name"],
            quantity=data.get("quantity", 1),
            packed=data.get("packed", False),
            priority=ItemPriority(data.get("priority", ItemPriority.IMPORTANT.value)),
            ai_suggested=data.get("ai_suggested", False),
        )


@dataclass
class PackingCategory:
    id: str
    name: str
    items: Dict[str, PackingItem] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "items": [item.to_dict() for item in self.items.values()],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PackingCategory":
        category = cls(id=data["id"], name=data["name"])
        for raw in data.get("items", []):
            item = PackingItem.from_dict(raw)
            category.items[item.id] = item
        return category


def count_items(categories: Iterable[PackingCategory]) -> Tuple[int, int]:
    """Return ``(packed, total)`` over all categories in one pass."""
    packed = total = 0
    for category in categories:
        for item in category.items.values():
            total += 1
            if item.packed:
                packed += 1
    return packed, total


def calculate_completion_percentage(categories: Iterable[PackingCategory]) -> int:
    """
    Rounded share of packed items, 0 when the list has no items.

    Integer arithmetic gives round-half-up: 1 of 8 packed is 12.5% -> 13.
    """
    packed, total = count_items(categories)
    if total == 0:
        return 0
    return (200 * packed + total) // (2 * total)


class PackingTree:
    """Mutable category -> item tree with a derived completion percentage."""

    def __init__(self, categories: Optional[Iterable[PackingCategory]] = None):
        self.categories: Dict[str, PackingCategory] = {}
        for category in categories or []:
            self.categories[category.id] = category
        self.completion_percentage = 0
        self._recompute()

    @classmethod
    def from_document(cls, document: Optional[List[Dict[str, Any]]]) -> "PackingTree":
        return cls(PackingCategory.from_dict(raw) for raw in document or [])

    def to_document(self) -> List[Dict[str, Any]]:
        return [category.to_dict() for category in self.categories.values()]

    def _recompute(self) -> None:
        self.completion_percentage = calculate_completion_percentage(self.categories.values())

    def _category(self, category_id: str) -> PackingCategory:
        category = self.categories.get(category_id)
        if category is None:
            raise NotFoundError("Category", {"category_id": category_id})
        return category

    def _item(self, category_id: str, item_id: str) -> PackingItem:
        item = self._category(category_id).items.get(item_id)
        if item is None:
            raise NotFoundError("Item", {"category_id": category_id, "item_id": item_id})
        return item

    def add_category(self, name: str) -> PackingCategory:
        category = PackingCategory(id=_new_id(self.categories), name=name)
        self.categories[category.id] = category
        self._recompute()
        return category

    def delete_category(self, category_id: str) -> None:
        self._category(category_id)
        del self.categories[category_id]
        self._recompute()

    def add_item(
        self,
        category_id: str,
        name: str,
        quantity: Optional[int] = None,
        priority: Optional[ItemPriority] = None,
        ai_suggested: bool = False,
    ) -> PackingItem:
        category = self._category(category_id)
        item = PackingItem(
            id=_new_id(category.items),
            name=name,
            quantity=quantity or 1,
            priority=priority or ItemPriority.IMPORTANT,
            packed=False,
            ai_suggested=ai_suggested,
        )
        category.items[item.id] = item
        self._recompute()
        return item

    def toggle_item_packed(self, category_id: str, item_id: str) -> PackingItem:
        item = self._item(category_id, item_id)
        item.packed = not item.packed
        self._recompute()
        return item

    def update_item(
        self,
        category_id: str,
        item_id: str,
        name: Optional[str] = None,
        quantity: Optional[int] = None,
        priority: Optional[ItemPriority] = None,
    ) -> PackingItem:
        """Apply the truthy fields only; ``packed`` is never touched here."""
        item = self._item(category_id, item_id)
        if name:
            item.name = name
        if quantity:
            item.quantity = quantity
        if priority:
            item.priority = priority
        self._recompute()
        return item

    def delete_item(self, category_id: str, item_id: str) -> None:
        category = self._category(category_id)
        self._item(category_id, item_id)
        del category.items[item_id]
        self._recompute()

    def merge_suggestions(self, suggested_categories: Iterable[Any]) -> List[PackingCategory]:
        """
        Append suggested categories after the existing ones.

        Existing categories are never replaced, renamed or deduplicated by
        name. Suggested items are always flagged ``ai_suggested``.
        """
        added = []
        for suggested in suggested_categories:
            category = PackingCategory(id=_new_id(self.categories), name=suggested.name)
            for suggested_item in suggested.items:
                item = PackingItem(
                    id=_new_id(category.items),
                    name=suggested_item.name,
                    quantity=suggested_item.quantity,
                    priority=suggested_item.priority,
                    packed=False,
                    ai_suggested=True,
                )
                category.items[item.id] = item
            self.categories[category.id] = category
            added.append(category)
        self._recompute()
        return added
