"""Booking model."""

from __future__ import annotations

from datetime import datetime

from fumotion.models._base import FumotionBaseModel, FumotionEnum
from fumotion.models.trip import Trip
from fumotion.models.user import User


class BookingStatus(FumotionEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    REJECTED = "rejected"
    UNKNOWN = "unknown"


class Booking(FumotionBaseModel):
    """A passenger's seat reservation on a trip.

    ``trip`` and ``passenger`` are only embedded by the list endpoints.
    """

    id: int
    trip_id: int
    passenger_id: int
    seats_booked: int = 1
    status: BookingStatus = BookingStatus.PENDING
    created_at: datetime | None = None
    trip: Trip | None = None
    passenger: User | None = None

    @property
    def is_pending(self) -> bool:
        return self.status is BookingStatus.PENDING
