"""Review endpoints.

Endpoints:
  - POST /api/reviews/bookings/:id
  - GET /api/reviews/pending
  - GET /api/reviews/check/:id
  - GET /api/reviews/user/:id
"""

from __future__ import annotations

from fumotion._api._common import parse_fields, parse_list, parse_model
from fumotion.gateway import ApiGateway
from fumotion.models.booking import Booking
from fumotion.models.requests import ReviewRequest
from fumotion.models.review import Review, UserReviews

_PENDING = "/api/reviews/pending"


async def create_review(gateway: ApiGateway, booking_id: int, request: ReviewRequest) -> Review:
    endpoint = f"/api/reviews/bookings/{booking_id}"
    envelope = await gateway.post(endpoint, request.to_body())
    return parse_model(envelope, "review", Review, endpoint=endpoint)


async def get_pending_reviews(gateway: ApiGateway) -> list[Booking]:
    """Completed bookings the current user has not reviewed yet."""
    envelope = await gateway.get(_PENDING)
    return parse_list(envelope, "reviews", Booking, endpoint=_PENDING)


async def review_exists(gateway: ApiGateway, booking_id: int) -> bool:
    envelope = await gateway.get(f"/api/reviews/check/{booking_id}")
    return bool(envelope.get("exists", False))


async def get_user_reviews(gateway: ApiGateway, user_id: int) -> UserReviews:
    endpoint = f"/api/reviews/user/{user_id}"
    envelope = await gateway.get(endpoint)
    reviews = parse_list(envelope, "reviews", Review, endpoint=endpoint)
    values = {"reviews": reviews, "average": envelope.get("average", 0)}
    return parse_fields(envelope, UserReviews, values, endpoint=endpoint)
