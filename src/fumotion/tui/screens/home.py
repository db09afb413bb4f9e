"""Main menu."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fumotion.navigation import Screen

if TYPE_CHECKING:
    from fumotion.tui.app import FumotionApp

_LOGOUT = "logout"
_QUIT = "quit"


async def home_screen(app: FumotionApp) -> None:
    user = app.store.get_user()
    options = [
        ("🔍 Search a trip", Screen.SEARCH.value),
        ("🚗 Offer a trip", Screen.CREATE_TRIP.value),
        ("📋 My trips", Screen.MY_TRIPS.value),
        ("🎫 My bookings", Screen.BOOKINGS.value),
        ("📨 Booking requests", Screen.RECEIVED_BOOKINGS.value),
        ("💬 Messages", Screen.CONVERSATIONS.value),
        ("⭐ Reviews to leave", Screen.REVIEWS.value),
        ("👤 My profile", Screen.PROFILE.value),
    ]
    if user is not None and user.is_admin:
        options.append(("🔧 Administration", Screen.ADMIN.value))
    options.append(("🚪 Log out", _LOGOUT))
    options.append(("✖ Quit", _QUIT))

    choice = await app.ui.choose("Main menu", options, back=False)
    if choice == _LOGOUT:
        app.nav.logout()
        app.notice("info", "Logged out")
    elif choice == _QUIT:
        app.quit()
    else:
        app.nav.transition(choice)
