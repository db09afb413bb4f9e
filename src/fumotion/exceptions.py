"""Custom exception hierarchy for fumotion."""

from __future__ import annotations

from typing import Any


class FumotionError(Exception):
    """Base exception for all fumotion errors."""


class FumotionConfigError(FumotionError):
    """Invalid or missing configuration."""


class FumotionValidationError(FumotionError, ValueError):
    """Client-side input check failed; no request was sent.

    ``field`` names the offending input when a single one is to blame.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class FumotionTransportError(FumotionError):
    """No response reached the client (DNS, refused connection, reset...)."""

    def __init__(
        self,
        message: str,
        *,
        endpoint: str = "",
    ) -> None:
        self.endpoint = endpoint
        super().__init__(message)


class FumotionApiError(FumotionError):
    """The server answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        data: Any = None,
        endpoint: str = "",
    ) -> None:
        self.status = status
        self.data = data
        self.endpoint = endpoint
        super().__init__(message)


class FumotionAuthError(FumotionApiError):
    """The server rejected the credentials (HTTP 401).

    By the time this is raised the persisted session has already been
    cleared, so the next protected navigation lands on the login screen.
    """
