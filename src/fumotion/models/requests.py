"""Pydantic request models for client entrypoints.

These models provide a consistent "validate → normalize → execute" flow.
They are used internally by :class:`fumotion.client.FumotionClient`, which
turns a failed validation into :class:`~fumotion.exceptions.FumotionValidationError`
before anything is sent over the network.
"""

from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")

MIN_PASSWORD_LENGTH = 6
MIN_RATING = 1
MAX_RATING = 5


def _required(value: str, label: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise ValueError(f"{label} is required")
    return stripped


class _Request(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )

    def to_body(self) -> dict[str, Any]:
        """JSON body sent to the API (unset optional fields omitted)."""
        return self.model_dump(exclude_none=True)


class LoginRequest(_Request):
    email: str
    password: str

    @field_validator("email", "password")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        return _required(value, "email and password")


class RegisterRequest(_Request):
    first_name: str
    last_name: str
    email: str
    password: str
    confirm_password: str = Field(exclude=True)
    phone: str | None = None

    @field_validator("first_name", "last_name", "email", "password")
    @classmethod
    def _non_empty(cls, value: str, info: ValidationInfo) -> str:
        return _required(value, info.field_name)

    @field_validator("phone")
    @classmethod
    def _blank_phone_is_none(cls, value: str | None) -> str | None:
        return value or None

    @model_validator(mode="after")
    def _check_passwords(self) -> RegisterRequest:
        if self.password != self.confirm_password:
            raise ValueError("passwords do not match")
        if len(self.password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"password must be at least {MIN_PASSWORD_LENGTH} characters")
        return self


class ProfileUpdateRequest(_Request):
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    avatar: str | None = None


class CreateTripRequest(_Request):
    """Form input for a new trip.

    ``date`` and ``time`` are combined into the ``departure_time`` the API
    expects; empty addresses fall back to the city name.
    """

    departure_city: str
    arrival_city: str
    date: str
    time: str
    departure_address: str = ""
    arrival_address: str = ""
    available_seats: int = Field(default=3, ge=1)
    price_per_seat: float = Field(default=5.0, ge=0)

    @field_validator("departure_city", "arrival_city")
    @classmethod
    def _city_required(cls, value: str, info: ValidationInfo) -> str:
        return _required(value, info.field_name)

    @field_validator("date")
    @classmethod
    def _date_format(cls, value: str) -> str:
        if not _DATE_RE.match(_required(value, "date")):
            raise ValueError("date must be YYYY-MM-DD")
        return value

    @field_validator("time")
    @classmethod
    def _time_format(cls, value: str) -> str:
        if not _TIME_RE.match(_required(value, "time")):
            raise ValueError("time must be HH:MM")
        return value

    @property
    def departure_time(self) -> str:
        return f"{self.date}T{self.time}:00"

    def to_body(self) -> dict[str, Any]:
        return {
            "departure_city": self.departure_city,
            "departure_address": self.departure_address or self.departure_city,
            "arrival_city": self.arrival_city,
            "arrival_address": self.arrival_address or self.arrival_city,
            "departure_time": self.departure_time,
            "available_seats": self.available_seats,
            "price_per_seat": self.price_per_seat,
        }


class TripSearchRequest(_Request):
    departure: str | None = None
    arrival: str | None = None
    date: str | None = None
    page: int | None = Field(default=None, ge=1)

    @field_validator("departure", "arrival", "date")
    @classmethod
    def _blank_is_none(cls, value: str | None) -> str | None:
        return value or None


class BookingRequest(_Request):
    """Seat reservation, bounded by the trip's remaining seats."""

    seats_booked: int = Field(ge=1)
    available_seats: int = Field(ge=0, exclude=True)

    @model_validator(mode="after")
    def _within_available(self) -> BookingRequest:
        if self.seats_booked > self.available_seats:
            raise ValueError(f"only {self.available_seats} seat(s) available")
        return self


class BookingStatusRequest(_Request):
    status: Literal["confirmed", "rejected"]


class ReviewRequest(_Request):
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING)
    comment: str | None = None

    @field_validator("comment")
    @classmethod
    def _blank_comment_is_none(cls, value: str | None) -> str | None:
        return value or None


class SendMessageRequest(_Request):
    receiver_id: int
    message: str
    trip_id: int | None = None

    @field_validator("message")
    @classmethod
    def _message_non_empty(cls, value: str) -> str:
        return _required(value, "message")
