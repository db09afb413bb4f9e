"""High-level async client for the Fumotion carpooling API."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import aiohttp
from pydantic import BaseModel, ValidationError

from fumotion._api import admin as _admin_api
from fumotion._api import auth as _auth_api
from fumotion._api import bookings as _bookings_api
from fumotion._api import messages as _messages_api
from fumotion._api import reviews as _reviews_api
from fumotion._api import trips as _trips_api
from fumotion._api.health import check_health
from fumotion._transport import HttpTransport, Transport
from fumotion.config import FumotionConfig
from fumotion.exceptions import FumotionError, FumotionValidationError
from fumotion.gateway import ApiGateway
from fumotion.models.admin import AdminStatistics
from fumotion.models.booking import Booking
from fumotion.models.message import Conversation, Message
from fumotion.models.requests import (
    BookingRequest,
    BookingStatusRequest,
    CreateTripRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    ReviewRequest,
    SendMessageRequest,
    TripSearchRequest,
)
from fumotion.models.review import Review, UserReviews
from fumotion.models.trip import Trip, TripSearchResult
from fumotion.models.user import User
from fumotion.session import SessionStore

_logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)


def _validate(model: type[R], **values: Any) -> R:
    """Build a request model, mapping pydantic errors to FumotionValidationError."""
    try:
        return model(**values)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = first.get("loc") or ()
        message = str(first.get("msg", "invalid input")).removeprefix("Value error, ")
        raise FumotionValidationError(message, field=str(loc[0]) if loc else None) from exc


class FumotionClient:
    """Async client for the Fumotion API.

    Usage::

        store = SessionStore(config.config_path)
        store.load()
        async with FumotionClient(config, store=store) as client:
            await client.login("me@example.com", "secret")
            trips = await client.search_trips(departure="Lyon")

    Every operation validates its input first and raises
    :class:`FumotionValidationError` without touching the network when
    the input is rejected.
    """

    def __init__(
        self,
        config: FumotionConfig | None = None,
        *,
        store: SessionStore | None = None,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config or FumotionConfig()
        self._store = store or SessionStore(self._config.config_path)
        self._external_session = session is not None
        self._http_session = session
        self._gateway: ApiGateway | None = None
        if transport is not None:
            self._gateway = ApiGateway(self._config, self._store, transport)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> FumotionClient:
        if self._gateway is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._gateway = ApiGateway(self._config, self._store, HttpTransport(self._http_session))
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._gateway = None

    @property
    def config(self) -> FumotionConfig:
        return self._config

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def gateway(self) -> ApiGateway:
        if self._gateway is None:
            raise FumotionError("Client not initialized. Use 'async with FumotionClient(...) as client:'")
        return self._gateway

    @property
    def current_user(self) -> User | None:
        return self._store.get_user()

    def is_authenticated(self) -> bool:
        return self._store.is_authenticated()

    async def check_health(self) -> bool:
        """Reachability probe used at start-up; never raises."""
        return await check_health(self.gateway)

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def login(self, email: str, password: str) -> User:
        """Authenticate and persist the new session."""
        request = _validate(LoginRequest, email=email, password=password)
        token, user = await _auth_api.login(self.gateway, request)
        self._store.set_session(token, user)
        return user

    async def register(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        confirm_password: str,
        phone: str | None = None,
    ) -> User:
        """Create an account and persist the resulting session."""
        request = _validate(
            RegisterRequest,
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password,
            confirm_password=confirm_password,
            phone=phone,
        )
        token, user = await _auth_api.register(self.gateway, request)
        self._store.set_session(token, user)
        return user

    def logout(self) -> None:
        _logger.debug("Clearing session on logout")
        self._store.clear()

    async def get_profile(self) -> User:
        return await _auth_api.get_profile(self.gateway)

    async def update_profile(self, **fields: Any) -> User:
        """Update the current user's profile and the stored copy of it."""
        request = _validate(ProfileUpdateRequest, **fields)
        user = await _auth_api.update_profile(self.gateway, request)
        self._store.set_user(user)
        return user

    async def get_public_profile(self, user_id: int) -> User:
        return await _auth_api.get_public_profile(self.gateway, user_id)

    async def verify_token(self) -> bool:
        return await _auth_api.verify_token(self.gateway)

    # ------------------------------------------------------------------
    # Trips
    # ------------------------------------------------------------------

    async def search_trips(
        self,
        *,
        departure: str | None = None,
        arrival: str | None = None,
        date: str | None = None,
        page: int | None = None,
    ) -> TripSearchResult:
        request = _validate(TripSearchRequest, departure=departure, arrival=arrival, date=date, page=page)
        return await _trips_api.search_trips(self.gateway, request)

    async def get_trip(self, trip_id: int) -> Trip:
        return await _trips_api.get_trip(self.gateway, trip_id)

    async def create_trip(
        self,
        *,
        departure_city: str,
        arrival_city: str,
        date: str,
        time: str,
        departure_address: str = "",
        arrival_address: str = "",
        available_seats: int = 3,
        price_per_seat: float = 5.0,
    ) -> Trip:
        request = _validate(
            CreateTripRequest,
            departure_city=departure_city,
            arrival_city=arrival_city,
            date=date,
            time=time,
            departure_address=departure_address,
            arrival_address=arrival_address,
            available_seats=available_seats,
            price_per_seat=price_per_seat,
        )
        return await _trips_api.create_trip(self.gateway, request)

    async def update_trip(self, trip_id: int, **fields: Any) -> Trip:
        return await _trips_api.update_trip(self.gateway, trip_id, fields)

    async def complete_trip(self, trip_id: int) -> bool:
        return await _trips_api.complete_trip(self.gateway, trip_id)

    async def cancel_trip(self, trip_id: int) -> bool:
        return await _trips_api.cancel_trip(self.gateway, trip_id)

    async def get_my_trips(self) -> list[Trip]:
        return await _trips_api.get_my_trips(self.gateway)

    # ------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------

    async def book_trip(self, trip: Trip, seats: int) -> Booking:
        """Reserve *seats* on *trip*.

        The seat count is checked against ``trip.available_seats`` before
        any request is made.
        """
        request = _validate(BookingRequest, seats_booked=seats, available_seats=trip.available_seats)
        return await _bookings_api.create_booking(self.gateway, trip.id, request)

    async def get_my_bookings(self) -> list[Booking]:
        return await _bookings_api.get_my_bookings(self.gateway)

    async def get_booking(self, booking_id: int) -> Booking:
        return await _bookings_api.get_booking(self.gateway, booking_id)

    async def cancel_booking(self, booking_id: int) -> bool:
        return await _bookings_api.cancel_booking(self.gateway, booking_id)

    async def update_booking_status(self, booking_id: int, status: str) -> bool:
        request = _validate(BookingStatusRequest, status=status)
        return await _bookings_api.update_booking_status(self.gateway, booking_id, request)

    async def get_bookings_for_my_trips(self) -> list[Booking]:
        return await _bookings_api.get_bookings_for_my_trips(self.gateway)

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    async def get_conversations(self) -> list[Conversation]:
        return await _messages_api.get_conversations(self.gateway)

    async def get_messages(self, other_user_id: int) -> list[Message]:
        return await _messages_api.get_messages(self.gateway, other_user_id)

    async def send_message(self, receiver_id: int, text: str, trip_id: int | None = None) -> Message | None:
        request = _validate(SendMessageRequest, receiver_id=receiver_id, message=text, trip_id=trip_id)
        return await _messages_api.send_message(self.gateway, request)

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------

    async def create_review(self, booking_id: int, rating: int, comment: str | None = None) -> Review:
        request = _validate(ReviewRequest, rating=rating, comment=comment)
        return await _reviews_api.create_review(self.gateway, booking_id, request)

    async def get_pending_reviews(self) -> list[Booking]:
        return await _reviews_api.get_pending_reviews(self.gateway)

    async def review_exists(self, booking_id: int) -> bool:
        return await _reviews_api.review_exists(self.gateway, booking_id)

    async def get_user_reviews(self, user_id: int) -> UserReviews:
        return await _reviews_api.get_user_reviews(self.gateway, user_id)

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    async def get_statistics(self) -> AdminStatistics:
        return await _admin_api.get_statistics(self.gateway)

    async def get_users(self) -> list[User]:
        return await _admin_api.get_users(self.gateway)

    async def update_user(self, user_id: int, **fields: Any) -> User:
        return await _admin_api.update_user(self.gateway, user_id, fields)

    async def delete_user(self, user_id: int) -> bool:
        return await _admin_api.delete_user(self.gateway, user_id)

    async def get_all_trips(self) -> list[Trip]:
        return await _admin_api.get_trips(self.gateway)

    async def delete_trip(self, trip_id: int) -> bool:
        return await _admin_api.delete_trip(self.gateway, trip_id)

    async def get_all_bookings(self) -> list[Booking]:
        return await _admin_api.get_bookings(self.gateway)

    async def delete_booking(self, booking_id: int) -> bool:
        return await _admin_api.delete_booking(self.gateway, booking_id)
