"""HTTP transport: one request in, one raw response out."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

import aiohttp

from fumotion.exceptions import FumotionTransportError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Undecoded HTTP response as seen by the gateway."""

    status: int
    reason: str
    content_type: str
    text: str


class Transport(Protocol):
    """Structural transport interface used by the gateway.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        data: str | None = None,
    ) -> TransportResponse:
        ...


class HttpTransport:
    """aiohttp-backed transport. Single attempt, no retry."""

    def __init__(self, http_session: aiohttp.ClientSession) -> None:
        self._http = http_session

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        data: str | None = None,
    ) -> TransportResponse:
        """Perform the request and read the whole body as text.

        Raises
        ------
        FumotionTransportError
            If no HTTP response was received at all.
        """
        try:
            async with self._http.request(method, url, data=data, headers=dict(headers)) as resp:
                text = await resp.text()
                return TransportResponse(
                    status=resp.status,
                    reason=resp.reason or "",
                    content_type=resp.headers.get("Content-Type", ""),
                    text=text,
                )
        except (aiohttp.ClientError, TimeoutError) as exc:
            _logger.debug("%s %s failed", method, url, exc_info=True)
            raise FumotionTransportError(
                f"{method} {url} failed: {exc or type(exc).__name__}",
                endpoint=url,
            ) from exc
