"""Screen handlers, one coroutine per :class:`~fumotion.navigation.Screen`."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from fumotion.navigation import Screen
from fumotion.tui.screens.admin import (
    admin_bookings_screen,
    admin_screen,
    admin_trips_screen,
    admin_users_screen,
)
from fumotion.tui.screens.auth import login_screen, register_screen
from fumotion.tui.screens.bookings import bookings_screen, received_bookings_screen
from fumotion.tui.screens.home import home_screen
from fumotion.tui.screens.messages import chat_screen, conversations_screen
from fumotion.tui.screens.profile import profile_screen
from fumotion.tui.screens.reviews import reviews_screen
from fumotion.tui.screens.trips import (
    create_trip_screen,
    my_trips_screen,
    search_screen,
    trip_detail_screen,
)

if TYPE_CHECKING:
    from fumotion.tui.app import FumotionApp


async def loading_screen(app: FumotionApp) -> None:
    app.ui.title("Starting…")
    await app.nav.startup(app.client.check_health)


SCREENS: dict[Screen, Callable[[FumotionApp], Awaitable[None]]] = {
    Screen.LOADING: loading_screen,
    Screen.LOGIN: login_screen,
    Screen.REGISTER: register_screen,
    Screen.HOME: home_screen,
    Screen.SEARCH: search_screen,
    Screen.TRIP_DETAIL: trip_detail_screen,
    Screen.CREATE_TRIP: create_trip_screen,
    Screen.MY_TRIPS: my_trips_screen,
    Screen.BOOKINGS: bookings_screen,
    Screen.RECEIVED_BOOKINGS: received_bookings_screen,
    Screen.CONVERSATIONS: conversations_screen,
    Screen.CHAT: chat_screen,
    Screen.REVIEWS: reviews_screen,
    Screen.PROFILE: profile_screen,
    Screen.ADMIN: admin_screen,
    Screen.ADMIN_USERS: admin_users_screen,
    Screen.ADMIN_TRIPS: admin_trips_screen,
    Screen.ADMIN_BOOKINGS: admin_bookings_screen,
}

__all__ = ["SCREENS"]
