"""
Packing list model. The category/item tree is stored as one JSON document
per trip and rewritten whole on every mutation.
"""
from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
import enum

from app.core.db import Base, JSONType
from app.models.user import _utcnow


class ItemPriority(str, enum.Enum):
    """How much an item matters for the trip"""
    ESSENTIAL = "essential"
    IMPORTANT = "important"
    OPTIONAL = "optional"


class PackingList(Base):
    __tablename__ = "packing_lists"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    categories = Column(JSONType, nullable=False, default=list)
    completion_percentage = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    trip = relationship("Trip", back_populates="packing_list")
