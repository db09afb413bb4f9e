"""Trip endpoints.

Endpoints:
  - GET /api/trips/search
  - GET/POST /api/trips
  - GET/PUT/DELETE /api/trips/:id
  - PUT /api/trips/:id/complete
"""

from __future__ import annotations

from typing import Any

from fumotion._api._common import parse_fields, parse_list, parse_model
from fumotion.gateway import ApiGateway
from fumotion.models.requests import CreateTripRequest, TripSearchRequest
from fumotion.models.trip import Trip, TripSearchResult

_TRIPS = "/api/trips"
_SEARCH = "/api/trips/search"


async def search_trips(gateway: ApiGateway, request: TripSearchRequest) -> TripSearchResult:
    envelope = await gateway.get(_SEARCH, params=request.to_body())
    trips = parse_list(envelope, "trips", Trip, endpoint=_SEARCH)
    values = {"trips": trips, "total": envelope.get("total", len(trips))}
    return parse_fields(envelope, TripSearchResult, values, endpoint=_SEARCH)


async def get_trip(gateway: ApiGateway, trip_id: int) -> Trip:
    endpoint = f"{_TRIPS}/{trip_id}"
    envelope = await gateway.get(endpoint)
    return parse_model(envelope, "trip", Trip, endpoint=endpoint)


async def create_trip(gateway: ApiGateway, request: CreateTripRequest) -> Trip:
    envelope = await gateway.post(_TRIPS, request.to_body())
    return parse_model(envelope, "trip", Trip, endpoint=_TRIPS)


async def update_trip(gateway: ApiGateway, trip_id: int, fields: dict[str, Any]) -> Trip:
    endpoint = f"{_TRIPS}/{trip_id}"
    envelope = await gateway.put(endpoint, fields)
    return parse_model(envelope, "trip", Trip, endpoint=endpoint)


async def complete_trip(gateway: ApiGateway, trip_id: int) -> bool:
    envelope = await gateway.put(f"{_TRIPS}/{trip_id}/complete")
    return envelope.success


async def cancel_trip(gateway: ApiGateway, trip_id: int) -> bool:
    envelope = await gateway.delete(f"{_TRIPS}/{trip_id}")
    return envelope.success


async def get_my_trips(gateway: ApiGateway) -> list[Trip]:
    """Trips the current user drives."""
    envelope = await gateway.get(_TRIPS)
    return parse_list(envelope, "trips", Trip, endpoint=_TRIPS)
