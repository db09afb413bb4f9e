"""Admin endpoints. All of them require an account with ``is_admin``.

Endpoints:
  - GET /api/admin/statistics
  - GET /api/admin/users, PUT/DELETE /api/admin/users/:id
  - GET /api/admin/trips, DELETE /api/admin/trips/:id
  - GET /api/admin/bookings, DELETE /api/admin/bookings/:id
"""

from __future__ import annotations

from typing import Any

from fumotion._api._common import parse_list, parse_model
from fumotion.gateway import ApiGateway
from fumotion.models.admin import AdminStatistics
from fumotion.models.booking import Booking
from fumotion.models.trip import Trip
from fumotion.models.user import User

_ADMIN = "/api/admin"


async def get_statistics(gateway: ApiGateway) -> AdminStatistics:
    endpoint = f"{_ADMIN}/statistics"
    envelope = await gateway.get(endpoint)
    return parse_model(envelope, "stats", AdminStatistics, endpoint=endpoint)


async def get_users(gateway: ApiGateway) -> list[User]:
    endpoint = f"{_ADMIN}/users"
    return parse_list(await gateway.get(endpoint), "users", User, endpoint=endpoint)


async def update_user(gateway: ApiGateway, user_id: int, fields: dict[str, Any]) -> User:
    endpoint = f"{_ADMIN}/users/{user_id}"
    return parse_model(await gateway.put(endpoint, fields), "user", User, endpoint=endpoint)


async def delete_user(gateway: ApiGateway, user_id: int) -> bool:
    return (await gateway.delete(f"{_ADMIN}/users/{user_id}")).success


async def get_trips(gateway: ApiGateway) -> list[Trip]:
    endpoint = f"{_ADMIN}/trips"
    return parse_list(await gateway.get(endpoint), "trips", Trip, endpoint=endpoint)


async def delete_trip(gateway: ApiGateway, trip_id: int) -> bool:
    return (await gateway.delete(f"{_ADMIN}/trips/{trip_id}")).success


async def get_bookings(gateway: ApiGateway) -> list[Booking]:
    endpoint = f"{_ADMIN}/bookings"
    return parse_list(await gateway.get(endpoint), "bookings", Booking, endpoint=endpoint)


async def delete_booking(gateway: ApiGateway, booking_id: int) -> bool:
    return (await gateway.delete(f"{_ADMIN}/bookings/{booking_id}")).success
