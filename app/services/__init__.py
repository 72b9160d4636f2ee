# Business logic services

from .packing_engine import PackingTree, PackingItem, PackingCategory, calculate_completion_percentage
from .packing_service import PackingService
from .trip_service import TripService
from .feedback_service import FeedbackService
from .user_service import UserService
from .weather_client import WeatherClient
from .suggestion_client import PackingSuggestionClient

__all__ = [
    "PackingTree",
    "PackingItem",
    "PackingCategory",
    "calculate_completion_percentage",
    "PackingService",
    "TripService",
    "FeedbackService",
    "UserService",
    "WeatherClient",
    "PackingSuggestionClient",
]
