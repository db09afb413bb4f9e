"""Message and conversation models."""

from __future__ import annotations

from datetime import datetime

from fumotion.models._base import FumotionBaseModel


class Message(FumotionBaseModel):
    """One message of a thread between two users."""

    id: int
    sender_id: int
    receiver_id: int
    trip_id: int | None = None
    message: str = ""
    created_at: datetime
    read_at: datetime | None = None


class Conversation(FumotionBaseModel):
    """Summary row of the conversations list, one per counterpart."""

    user_id: int
    first_name: str = ""
    last_name: str = ""
    avatar: str | None = None
    last_message: str = ""
    last_message_time: datetime | None = None
    unread_count: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip() or f"User #{self.user_id}"
