"""User model."""

from __future__ import annotations

from datetime import datetime

from fumotion.models._base import FumotionBaseModel


class User(FumotionBaseModel):
    """A Fumotion account as returned by the auth and admin endpoints."""

    id: int
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    phone: str | None = None
    avatar: str | None = None
    is_admin: bool = False
    created_at: datetime | None = None

    @property
    def full_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or f"User #{self.id}"
