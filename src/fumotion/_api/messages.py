"""Messaging endpoints.

Endpoints:
  - GET /api/messages/conversations
  - GET /api/messages/:otherUserId
  - POST /api/messages
"""

from __future__ import annotations

from fumotion._api._common import parse_list, parse_model
from fumotion.gateway import ApiGateway
from fumotion.models.message import Conversation, Message
from fumotion.models.requests import SendMessageRequest

_MESSAGES = "/api/messages"
_CONVERSATIONS = "/api/messages/conversations"


async def get_conversations(gateway: ApiGateway) -> list[Conversation]:
    envelope = await gateway.get(_CONVERSATIONS)
    return parse_list(envelope, "conversations", Conversation, endpoint=_CONVERSATIONS)


async def get_messages(gateway: ApiGateway, other_user_id: int) -> list[Message]:
    """Full thread with *other_user_id*, oldest first."""
    endpoint = f"{_MESSAGES}/{other_user_id}"
    envelope = await gateway.get(endpoint)
    return parse_list(envelope, "messages", Message, endpoint=endpoint)


async def send_message(gateway: ApiGateway, request: SendMessageRequest) -> Message | None:
    envelope = await gateway.post(_MESSAGES, request.to_body())
    # Older servers only acknowledge with {"success": true}.
    if not isinstance(envelope.get("message"), dict):
        return None
    return parse_model(envelope, "message", Message, endpoint=_MESSAGES)
