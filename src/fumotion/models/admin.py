"""Admin dashboard models."""

from __future__ import annotations

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from fumotion.models._base import FumotionBaseModel


class AdminStatistics(FumotionBaseModel):
    """Platform counters from ``/api/admin/statistics``.

    Unlike the rest of the API this payload uses camelCase keys.
    """

    model_config = ConfigDict(alias_generator=to_camel)

    total_users: int = 0
    total_trips: int = 0
    total_bookings: int = 0
    active_trips: int = 0
