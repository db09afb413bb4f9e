"""Review models."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from fumotion.models._base import FumotionBaseModel


class Review(FumotionBaseModel):
    """A rating left by one participant of a booking about the other."""

    id: int
    booking_id: int
    reviewer_id: int
    reviewed_user_id: int
    rating: int = Field(ge=1, le=5)
    comment: str | None = None
    created_at: datetime | None = None


class UserReviews(FumotionBaseModel):
    """Reviews received by a user together with their average rating."""

    reviews: list[Review] = Field(default_factory=list)
    average: float = 0.0
