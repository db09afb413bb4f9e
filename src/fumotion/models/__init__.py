"""Data models for Fumotion API payloads."""

from fumotion.models._base import FumotionBaseModel, FumotionEnum
from fumotion.models.admin import AdminStatistics
from fumotion.models.booking import Booking, BookingStatus
from fumotion.models.message import Conversation, Message
from fumotion.models.review import Review, UserReviews
from fumotion.models.trip import Trip, TripSearchResult, TripStatus
from fumotion.models.user import User

__all__ = [
    "AdminStatistics",
    "Booking",
    "BookingStatus",
    "Conversation",
    "FumotionBaseModel",
    "FumotionEnum",
    "Message",
    "Review",
    "Trip",
    "TripSearchResult",
    "TripStatus",
    "User",
    "UserReviews",
]
