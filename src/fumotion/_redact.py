"""Helpers for safe debug logging.

Login and register bodies carry passwords, auth responses carry bearer
tokens and every authenticated request carries an ``Authorization``
header. Everything the gateway logs goes through :func:`redact_for_log`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_SECRET_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "confirm_password",
        "token",
        "authorization",
        "cookie",
    }
)

_MAX_DEPTH = 10


def _mask(key: str, value: Any) -> str:
    # Keep the auth scheme so logs still show whether a credential was sent.
    if key.lower() == "authorization" and isinstance(value, str) and " " in value:
        scheme, _, _ = value.partition(" ")
        return f"{scheme} <redacted>"
    return "<redacted>"


def redact_for_log(value: Any, *, max_string: int = 256, _depth: int = 0) -> Any:
    """Return a copy of *value* with secrets masked and long strings cut."""
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, str):
        return value if len(value) <= max_string else f"{value[:max_string]}…<truncated>"

    if isinstance(value, Mapping):
        return {
            str(k): _mask(str(k), v)
            if str(k).lower() in _SECRET_KEYS
            else redact_for_log(v, max_string=max_string, _depth=_depth + 1)
            for k, v in value.items()
        }

    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    return repr(value)
