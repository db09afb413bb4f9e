from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl, urlsplit

import pytest

from fumotion._transport import TransportResponse
from fumotion.client import FumotionClient
from fumotion.config import FumotionConfig
from fumotion.session import SessionStore

API_URL = "http://api.test"


def user_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": 1,
        "email": "ann@example.com",
        "first_name": "Ann",
        "last_name": "Driver",
        "phone": None,
        "is_admin": False,
        "created_at": "2025-01-02T10:00:00.000Z",
    }
    payload.update(overrides)
    return payload


def trip_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": 7,
        "driver_id": 1,
        "driver_name": "Ann Driver",
        "departure_city": "Lyon",
        "departure_address": "Part-Dieu",
        "arrival_city": "Paris",
        "arrival_address": "Gare de Lyon",
        "departure_time": "2025-03-10T08:30:00.000Z",
        "available_seats": 2,
        "price_per_seat": 12.5,
        "status": "active",
    }
    payload.update(overrides)
    return payload


@dataclass
class SentRequest:
    method: str
    path: str
    query: dict[str, str]
    headers: dict[str, str]
    body: Any


@dataclass
class FakeBackend:
    """In-memory stand-in for the HTTP transport, keyed by (method, path)."""

    routes: dict[tuple[str, str], TransportResponse | Exception] = field(default_factory=dict)
    calls: list[SentRequest] = field(default_factory=list)

    def route(
        self,
        method: str,
        path: str,
        payload: Any = None,
        *,
        status: int = 200,
        reason: str = "OK",
        content_type: str = "application/json; charset=utf-8",
    ) -> None:
        if isinstance(payload, str):
            text = payload
        else:
            text = "" if payload is None else json.dumps(payload)
        self.routes[(method, path)] = TransportResponse(
            status=status,
            reason=reason,
            content_type=content_type,
            text=text,
        )

    def fail(self, method: str, path: str, exc: Exception) -> None:
        self.routes[(method, path)] = exc

    def paths(self) -> list[str]:
        return [f"{call.method} {call.path}" for call in self.calls]

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        data: str | None = None,
    ) -> TransportResponse:
        parts = urlsplit(url)
        assert f"{parts.scheme}://{parts.netloc}" == API_URL
        self.calls.append(
            SentRequest(
                method=method,
                path=parts.path,
                query=dict(parse_qsl(parts.query)),
                headers=dict(headers),
                body=json.loads(data) if data is not None else None,
            )
        )
        response = self.routes.get((method, parts.path))
        if response is None:
            raise AssertionError(f"Unexpected request: {method} {url}")
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def config(tmp_path: Path) -> FumotionConfig:
    return FumotionConfig(base_url=f"{API_URL}/", config_path=tmp_path / "config.json", poll_interval=0.05)


@pytest.fixture
def store(config: FumotionConfig) -> SessionStore:
    return SessionStore(config.config_path)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def client(config: FumotionConfig, store: SessionStore, backend: FakeBackend) -> FumotionClient:
    return FumotionClient(config, store=store, transport=backend)
