from __future__ import annotations

import asyncio
import contextlib
import io
from typing import Any

import pytest
from conftest import FakeBackend, trip_payload, user_payload
from rich.console import Console

from fumotion.client import FumotionClient
from fumotion.exceptions import FumotionTransportError
from fumotion.models.user import User
from fumotion.navigation import NavigationController, Screen
from fumotion.polling import PollingLoop
from fumotion.session import SessionStore
from fumotion.tui.app import FumotionApp
from fumotion.tui.screens import SCREENS
from fumotion.tui.ui import BACK, Ui


class ScriptedPrompt:
    """Answers prompts from a list, then behaves like Ctrl-D."""

    def __init__(self, answers: list[str]) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    async def prompt_async(self, message: str, *, default: str = "", is_password: bool = False) -> str:
        self.prompts.append(message)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0) or default


def _app(client: FumotionClient, store: SessionStore, answers: list[str]) -> tuple[FumotionApp, io.StringIO]:
    out = io.StringIO()
    ui = Ui(console=Console(file=out, width=120), prompt=ScriptedPrompt(answers))  # type: ignore[arg-type]
    return FumotionApp(client, NavigationController(store), ui, SCREENS), out


def test_every_screen_has_a_handler() -> None:
    assert set(SCREENS) == set(Screen)


@pytest.mark.asyncio
async def test_menu_choice_and_back() -> None:
    ui = Ui(console=Console(file=io.StringIO()), prompt=ScriptedPrompt(["9", "2", "0"]))  # type: ignore[arg-type]
    options = [("One", "one"), ("Two", "two")]

    assert await ui.choose("Pick", options) == "two"
    assert await ui.choose("Pick", options) == BACK


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_login_flow_lands_on_home(client: FumotionClient, store: SessionStore, backend: FakeBackend) -> None:
    backend.route("GET", "/api/health", {"status": "ok"})
    backend.route("POST", "/api/auth/login", {"success": True, "token": "abc", "user": user_payload()})
    # email, password, then "Quit" from the main menu
    app, out = _app(client, store, ["ann@example.com", "secret", "10"])

    await app.run()

    assert app.nav.screen is Screen.HOME
    assert store.get_token() == "abc"
    assert not app.running
    assert "Welcome back, Ann" in out.getvalue()
    assert backend.paths() == ["GET /api/health", "POST /api/auth/login"]


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_offline_start_shows_banner(client: FumotionClient, store: SessionStore, backend: FakeBackend) -> None:
    store.set_session("abc", User.model_validate(user_payload()))
    backend.fail("GET", "/api/health", FumotionTransportError("refused"))
    app, out = _app(client, store, [])

    await app.run()

    assert app.nav.offline
    assert app.nav.screen is Screen.LOGIN
    assert "API unreachable" in out.getvalue()


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_overbooking_is_reported_without_request(
    client: FumotionClient,
    store: SessionStore,
    backend: FakeBackend,
) -> None:
    store.set_session("abc", User.model_validate(user_payload(id=5)))
    backend.route("GET", "/api/health", {"status": "ok"})
    backend.route("GET", "/api/trips/7", {"success": True, "trip": trip_payload(available_seats=2)})
    # "Book", then 3 seats; the detail screen is rendered again with the error notice
    app, out = _app(client, store, ["1", "3"])
    await app.nav.startup(client.check_health)
    app.nav.transition(Screen.TRIP_DETAIL, trip_id=7)

    await app.run()

    assert "only 2 seat(s) available" in out.getvalue()
    assert not any(path.startswith("POST") for path in backend.paths())


@pytest.mark.asyncio
async def test_leaving_chat_cancels_its_poll(client: FumotionClient, store: SessionStore) -> None:
    store.set_session("abc", User.model_validate(user_payload()))
    app, _ = _app(client, store, [])
    app.nav.transition(Screen.CHAT, user_id=2)

    class _Thread:
        async def get_messages(self, other_user_id: int) -> list[Any]:
            return []

        async def get_public_profile(self, user_id: int) -> User:
            return User(id=user_id)

    async def never(_delay: float) -> None:
        await asyncio.Event().wait()

    poll = PollingLoop(_Thread(), 2, sleep=never)
    await poll.start()
    app.active_poll = poll
    assert poll.running

    app.nav.transition(Screen.CHAT, user_id=2)
    await asyncio.sleep(0)
    assert poll.running

    app.nav.transition(Screen.HOME)
    for _ in range(3):
        await asyncio.sleep(0)
    assert not poll.running


async def _open(app: FumotionApp, client: FumotionClient, backend: FakeBackend, screen: Screen, **params: int) -> None:
    backend.route("GET", "/api/health", {"status": "ok"})
    await app.nav.startup(client.check_health)
    app.nav.transition(screen, **params)


@pytest.mark.asyncio
@pytest.mark.parametrize("answer", ["²", "①", "x"])
async def test_non_decimal_menu_input_is_rejected(answer: str) -> None:
    out = io.StringIO()
    ui = Ui(console=Console(file=out), prompt=ScriptedPrompt([answer, "1"]))  # type: ignore[arg-type]

    assert await ui.choose("Pick", [("One", "one")]) == "one"
    assert "Unknown choice" in out.getvalue()


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_odd_digit_in_main_menu_keeps_app_running(
    client: FumotionClient,
    store: SessionStore,
    backend: FakeBackend,
) -> None:
    backend.route("GET", "/api/health", {"status": "ok"})
    backend.route("POST", "/api/auth/login", {"success": True, "token": "abc", "user": user_payload()})
    app, out = _app(client, store, ["ann@example.com", "secret", "²", "10"])

    await app.run()

    assert "Unknown choice" in out.getvalue()
    assert not app.running
    assert app.nav.screen is Screen.HOME


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_invalid_rating_is_reported(client: FumotionClient, store: SessionStore, backend: FakeBackend) -> None:
    store.set_session("abc", User.model_validate(user_payload()))
    backend.route(
        "GET",
        "/api/reviews/pending",
        {"success": True, "reviews": [{"id": 3, "trip_id": 7, "passenger_id": 1, "status": "confirmed"}]},
    )
    app, out = _app(client, store, ["1", "²"])
    await _open(app, client, backend, Screen.REVIEWS)

    await app.run()

    assert "Rating must be a number between 1 and 5" in out.getvalue()
    assert not any(path.startswith("POST") for path in backend.paths())


@pytest.mark.asyncio
@pytest.mark.e2e
@pytest.mark.parametrize(
    ("seats", "message"),
    [("-2", "greater than or equal to 1"), ("abc", "Seats must be a whole number")],
)
async def test_create_trip_reports_bad_seat_count(
    client: FumotionClient,
    store: SessionStore,
    backend: FakeBackend,
    seats: str,
    message: str,
) -> None:
    store.set_session("abc", User.model_validate(user_payload()))
    app, out = _app(client, store, ["Lyon", "", "Paris", "", "2025-03-10", "08:30", seats, "5", "y"])
    await _open(app, client, backend, Screen.CREATE_TRIP)

    await app.run()

    assert message in out.getvalue()
    assert not any(path.startswith("POST") for path in backend.paths())


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_chat_title_is_printed_before_the_thread(
    client: FumotionClient,
    store: SessionStore,
    backend: FakeBackend,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr("fumotion.tui.screens.messages.patch_stdout", contextlib.nullcontext)
    store.set_session("abc", User.model_validate(user_payload()))
    bob = user_payload(id=2, first_name="Bob", last_name="Rider")
    backend.route("GET", "/api/auth/users/2", {"success": True, "user": bob})
    backend.route(
        "GET",
        "/api/messages/2",
        {
            "success": True,
            "messages": [
                {
                    "id": 1,
                    "sender_id": 2,
                    "receiver_id": 1,
                    "message": "Hello there",
                    "created_at": "2025-01-01T10:00:00Z",
                }
            ],
        },
    )
    app, out = _app(client, store, [])
    await _open(app, client, backend, Screen.CHAT, user_id=2)

    await app.run()

    text = out.getvalue()
    assert text.index("Conversation with Bob Rider") < text.index("Hello there")
    assert text.count("Hello there") == 1
    assert app.active_poll is None
