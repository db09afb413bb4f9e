"""Single chokepoint for every request to the Fumotion API.

The gateway builds the URL, attaches credentials, decodes the body and
classifies the outcome:

* 2xx → :class:`ResponseEnvelope`
* 401 → session cleared, then :class:`~fumotion.exceptions.FumotionAuthError`
* other non-2xx → :class:`~fumotion.exceptions.FumotionApiError`
* no response → :class:`~fumotion.exceptions.FumotionTransportError`

Nothing else in the package talks to the network.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

from fumotion._constants import USER_AGENT
from fumotion._redact import redact_for_log
from fumotion._transport import Transport, TransportResponse
from fumotion.config import FumotionConfig
from fumotion.exceptions import FumotionApiError, FumotionAuthError
from fumotion.session import SessionStore

_logger = logging.getLogger(__name__)

_JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True, slots=True)
class ResponseEnvelope:
    """Decoded 2xx response.

    ``payload`` is the parsed JSON document, or the raw text when the
    server did not declare a JSON content type.
    """

    status: int
    payload: Any

    @property
    def success(self) -> bool:
        if isinstance(self.payload, dict) and "success" in self.payload:
            return bool(self.payload["success"])
        return 200 <= self.status < 300

    def get(self, name: str, default: Any = None) -> Any:
        """Return a named payload field (``user``, ``trips``...)."""
        if isinstance(self.payload, dict):
            value = self.payload.get(name)
            return default if value is None else value
        return default


def _decode_body(response: TransportResponse) -> Any:
    if _JSON_CONTENT_TYPE not in response.content_type.lower():
        return response.text
    if not response.text:
        return None
    try:
        return json.loads(response.text)
    except json.JSONDecodeError:
        _logger.debug("Body declared as JSON is not JSON: %s", response.text[:200])
        return response.text


def _error_message(payload: Any, reason: str) -> str:
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message:
            return message
    return reason or "API Error"


class ApiGateway:
    """Send requests through *transport* on behalf of the current session."""

    def __init__(
        self,
        config: FumotionConfig,
        store: SessionStore,
        transport: Transport,
    ) -> None:
        self._config = config
        self._store = store
        self._transport = transport

    def url_for(self, path: str, params: Mapping[str, Any] | None = None) -> str:
        """Absolute URL for *path*; ``None``-valued params are left out."""
        url = f"{self._config.base_url}{path}"
        if params:
            query = urlencode({key: value for key, value in params.items() if value is not None})
            if query:
                url = f"{url}?{query}"
        return url

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": _JSON_CONTENT_TYPE,
            "Accept": _JSON_CONTENT_TYPE,
            "User-Agent": USER_AGENT,
        }
        token = self._store.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> ResponseEnvelope:
        """Perform one API call.

        Parameters
        ----------
        method : str
            HTTP verb.
        path : str
            Endpoint path starting with ``/api/``.
        body : Any
            JSON-serialisable request body, if any.
        params : Mapping or None
            Query string parameters.

        Raises
        ------
        FumotionAuthError
            On HTTP 401. The session store is cleared first.
        FumotionApiError
            On any other non-2xx status.
        FumotionTransportError
            If the server could not be reached.
        """
        method = method.upper()
        url = self.url_for(path, params)
        data = json.dumps(body) if body is not None else None
        headers = self._headers()

        _logger.debug("%s %s headers=%s body=%s", method, url, redact_for_log(headers), redact_for_log(body))

        response = await self._transport.send(method, url, headers=headers, data=data)
        payload = _decode_body(response)

        _logger.debug("%s %s -> %s %s", method, path, response.status, redact_for_log(payload))

        if 200 <= response.status < 300:
            return ResponseEnvelope(status=response.status, payload=payload)

        message = _error_message(payload, response.reason)
        if response.status == 401:
            _logger.info("%s %s rejected with 401, clearing session", method, path)
            self._store.clear()
            raise FumotionAuthError(message, status=401, data=payload, endpoint=path)

        raise FumotionApiError(message, status=response.status, data=payload, endpoint=path)

    async def get(self, path: str, *, params: Mapping[str, Any] | None = None) -> ResponseEnvelope:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Any = None) -> ResponseEnvelope:
        return await self.request("POST", path, body)

    async def put(self, path: str, body: Any = None) -> ResponseEnvelope:
        return await self.request("PUT", path, body)

    async def delete(self, path: str) -> ResponseEnvelope:
        return await self.request("DELETE", path)
