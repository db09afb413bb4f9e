"""Reachability probe.

Endpoint:
  - GET /api/health
"""

from __future__ import annotations

import logging

from fumotion._constants import HEALTH_ENDPOINT
from fumotion.exceptions import FumotionError
from fumotion.gateway import ApiGateway

_logger = logging.getLogger(__name__)


async def check_health(gateway: ApiGateway) -> bool:
    """Return ``True`` if the API answered the health endpoint with a 2xx."""
    try:
        await gateway.get(HEALTH_ENDPOINT)
    except FumotionError as exc:
        _logger.info("Fumotion API unreachable: %s", exc)
        return False
    return True
