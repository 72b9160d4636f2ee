"""
Packing list schemas for API requests/responses and AI provider payloads
"""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from datetime import datetime
from typing import List, Optional

from app.models.packing_list import ItemPriority


class PackingItemRead(BaseModel):
    id: str
    name: str
    quantity: int
    packed: bool
    priority: ItemPriority
    ai_suggested: bool


class PackingCategoryRead(BaseModel):
    id: str
    name: str
    items: List[PackingItemRead] = []


class PackingListRead(BaseModel):
    """Schema for packing list read response"""
    id: int
    trip_id: int
    categories: List[PackingCategoryRead]
    completion_percentage: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class ItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    quantity: Optional[int] = Field(None, ge=1)
    priority: Optional[ItemPriority] = None


class ItemUpdate(BaseModel):
    """Partial item update; ``packed`` is changed through the toggle route only"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    quantity: Optional[int] = Field(None, ge=1)
    priority: Optional[ItemPriority] = None


class SuggestedItem(BaseModel):
    """One item as returned by the text-generation provider"""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=200)
    quantity: int = Field(1, ge=1)
    priority: ItemPriority = ItemPriority.IMPORTANT

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class SuggestedCategory(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=100)
    items: List[SuggestedItem] = []


class SuggestedPackingList(BaseModel):
    """Validated shape of the provider's ``{"categories": [...]}`` payload"""
    model_config = ConfigDict(extra="ignore")

    categories: List[SuggestedCategory]
