"""
Models package for the PackPal backend.

Importing this package registers every table on ``Base.metadata``.
"""

from .user import User, UserRole
from .trip import Trip, TripType
from .packing_list import PackingList, ItemPriority
from .feedback import Feedback, FeedbackCategory

__all__ = [
    "User",
    "UserRole",
    "Trip",
    "TripType",
    "PackingList",
    "ItemPriority",
    "Feedback",
    "FeedbackCategory",
]
