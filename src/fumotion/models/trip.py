"""Trip model."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from fumotion.models._base import FumotionBaseModel, FumotionEnum


class TripStatus(FumotionEnum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


class Trip(FumotionBaseModel):
    """A trip offered by a driver.

    ``available_seats`` is the number of seats still bookable; the server
    decrements it as bookings are confirmed.
    """

    id: int
    driver_id: int
    driver_name: str | None = None
    driver_avatar: str | None = None
    departure_city: str = ""
    departure_address: str = ""
    departure_lat: float | None = None
    departure_lng: float | None = None
    arrival_city: str = ""
    arrival_address: str = ""
    arrival_lat: float | None = None
    arrival_lng: float | None = None
    departure_time: datetime | None = None
    available_seats: int = Field(default=0, ge=0)
    price_per_seat: float = 0.0
    status: TripStatus = TripStatus.ACTIVE
    created_at: datetime | None = None

    @property
    def is_bookable(self) -> bool:
        return self.status is TripStatus.ACTIVE and self.available_seats > 0

    @property
    def route(self) -> str:
        return f"{self.departure_city} → {self.arrival_city}"


class TripSearchResult(FumotionBaseModel):
    """One page of ``/api/trips/search`` results."""

    trips: list[Trip] = Field(default_factory=list)
    total: int = 0
