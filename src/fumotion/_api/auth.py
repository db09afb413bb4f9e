"""Authentication and profile endpoints.

Endpoints:
  - POST /api/auth/login
  - POST /api/auth/register
  - GET/PUT /api/auth/profile
  - GET /api/auth/users/:id
  - GET /api/auth/verify-token
"""

from __future__ import annotations

import logging

from fumotion._api._common import parse_model
from fumotion.exceptions import FumotionApiError
from fumotion.gateway import ApiGateway, ResponseEnvelope
from fumotion.models.requests import LoginRequest, ProfileUpdateRequest, RegisterRequest
from fumotion.models.user import User

_logger = logging.getLogger(__name__)

_LOGIN = "/api/auth/login"
_REGISTER = "/api/auth/register"
_PROFILE = "/api/auth/profile"
_VERIFY = "/api/auth/verify-token"


def _parse_auth(endpoint: str, envelope: ResponseEnvelope) -> tuple[str, User]:
    token = envelope.get("token")
    if not isinstance(token, str) or not token:
        raise FumotionApiError(
            f"{endpoint} response missing token",
            status=envelope.status,
            endpoint=endpoint,
        )
    user = parse_model(envelope, "user", User, endpoint=endpoint)
    return token, user


async def login(gateway: ApiGateway, request: LoginRequest) -> tuple[str, User]:
    """Exchange credentials for a ``(token, user)`` pair."""
    envelope = await gateway.post(_LOGIN, request.to_body())
    token, user = _parse_auth(_LOGIN, envelope)
    _logger.debug("Logged in as user id=%s", user.id)
    return token, user


async def register(gateway: ApiGateway, request: RegisterRequest) -> tuple[str, User]:
    """Create an account; the server logs the new user in straight away."""
    envelope = await gateway.post(_REGISTER, request.to_body())
    return _parse_auth(_REGISTER, envelope)


async def get_profile(gateway: ApiGateway) -> User:
    envelope = await gateway.get(_PROFILE)
    return parse_model(envelope, "user", User, endpoint=_PROFILE)


async def update_profile(gateway: ApiGateway, request: ProfileUpdateRequest) -> User:
    envelope = await gateway.put(_PROFILE, request.to_body())
    return parse_model(envelope, "user", User, endpoint=_PROFILE)


async def get_public_profile(gateway: ApiGateway, user_id: int) -> User:
    endpoint = f"/api/auth/users/{user_id}"
    envelope = await gateway.get(endpoint)
    return parse_model(envelope, "user", User, endpoint=endpoint)


async def verify_token(gateway: ApiGateway) -> bool:
    envelope = await gateway.get(_VERIFY)
    return envelope.success
