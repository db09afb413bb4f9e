"""Booking endpoints.

Endpoints:
  - POST /api/bookings/trips/:id/book
  - GET /api/bookings
  - GET /api/bookings/:id
  - PUT /api/bookings/:id/cancel
  - PUT /api/bookings/:id/status
  - GET /api/bookings/my-trips
"""

from __future__ import annotations

from fumotion._api._common import parse_list, parse_model
from fumotion.gateway import ApiGateway
from fumotion.models.booking import Booking
from fumotion.models.requests import BookingRequest, BookingStatusRequest

_BOOKINGS = "/api/bookings"
_MY_TRIPS = "/api/bookings/my-trips"


async def create_booking(gateway: ApiGateway, trip_id: int, request: BookingRequest) -> Booking:
    endpoint = f"{_BOOKINGS}/trips/{trip_id}/book"
    envelope = await gateway.post(endpoint, request.to_body())
    return parse_model(envelope, "booking", Booking, endpoint=endpoint)


async def get_my_bookings(gateway: ApiGateway) -> list[Booking]:
    """Bookings the current user made as a passenger."""
    envelope = await gateway.get(_BOOKINGS)
    return parse_list(envelope, "bookings", Booking, endpoint=_BOOKINGS)


async def get_booking(gateway: ApiGateway, booking_id: int) -> Booking:
    endpoint = f"{_BOOKINGS}/{booking_id}"
    envelope = await gateway.get(endpoint)
    return parse_model(envelope, "booking", Booking, endpoint=endpoint)


async def cancel_booking(gateway: ApiGateway, booking_id: int) -> bool:
    envelope = await gateway.put(f"{_BOOKINGS}/{booking_id}/cancel")
    return envelope.success


async def update_booking_status(gateway: ApiGateway, booking_id: int, request: BookingStatusRequest) -> bool:
    """Driver decision on a pending booking."""
    envelope = await gateway.put(f"{_BOOKINGS}/{booking_id}/status", request.to_body())
    return envelope.success


async def get_bookings_for_my_trips(gateway: ApiGateway) -> list[Booking]:
    """Bookings other users made on the current user's trips."""
    envelope = await gateway.get(_MY_TRIPS)
    return parse_list(envelope, "bookings", Booking, endpoint=_MY_TRIPS)
