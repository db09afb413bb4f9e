"""Administration screens. Only reachable from the home menu of admins."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING

from rich.table import Table

from fumotion.exceptions import FumotionError
from fumotion.navigation import Screen
from fumotion.tui.screens.bookings import booking_label
from fumotion.tui.screens.trips import trip_label
from fumotion.tui.ui import BACK

if TYPE_CHECKING:
    from fumotion.tui.app import FumotionApp


async def admin_screen(app: FumotionApp) -> None:
    app.ui.title("🛠 Administration")
    try:
        stats = await app.client.get_statistics()
    except FumotionError as exc:
        app.report(exc)
    else:
        table = Table(show_header=False, box=None)
        table.add_row("Users", str(stats.total_users))
        table.add_row("Trips", f"{stats.total_trips} ({stats.active_trips} active)")
        table.add_row("Bookings", str(stats.total_bookings))
        app.ui.console.print(table)

    choice = await app.ui.choose(
        "Manage",
        [
            ("👥 Users", Screen.ADMIN_USERS.value),
            ("🚗 Trips", Screen.ADMIN_TRIPS.value),
            ("🎫 Bookings", Screen.ADMIN_BOOKINGS.value),
        ],
    )
    app.nav.transition(Screen.HOME if choice == BACK else Screen(choice))


async def _delete_from_list(
    app: FumotionApp,
    title: str,
    options: Sequence[tuple[str, str]],
    delete: Callable[[int], Awaitable[bool]],
) -> None:
    choice = await app.ui.choose(title, options)
    if choice == BACK:
        app.nav.back()
        return
    label = next(text for text, value in options if value == choice)
    confirm = await app.ui.ask(f"Delete {label}? [y/N]")
    if confirm.lower() not in {"y", "yes"}:
        return
    try:
        await delete(int(choice))
    except FumotionError as exc:
        app.report(exc)
        return
    app.notice("success", "Deleted")


async def admin_users_screen(app: FumotionApp) -> None:
    app.ui.title("👥 Users")
    try:
        users = await app.client.get_users()
    except FumotionError as exc:
        app.report(exc)
        app.nav.back()
        return
    options = [
        (f"{u.full_name} <{u.email}>{' (admin)' if u.is_admin else ''}", str(u.id)) for u in users
    ]
    await _delete_from_list(app, "Select a user to delete", options, app.client.delete_user)


async def admin_trips_screen(app: FumotionApp) -> None:
    app.ui.title("🚗 Trips")
    try:
        trips = await app.client.get_all_trips()
    except FumotionError as exc:
        app.report(exc)
        app.nav.back()
        return
    options = [(f"#{t.id} {trip_label(t)}  [{t.status.value}]", str(t.id)) for t in trips]
    await _delete_from_list(app, "Select a trip to delete", options, app.client.delete_trip)


async def admin_bookings_screen(app: FumotionApp) -> None:
    app.ui.title("🎫 Bookings")
    try:
        bookings = await app.client.get_all_bookings()
    except FumotionError as exc:
        app.report(exc)
        app.nav.back()
        return
    options = [(f"#{b.id} {booking_label(b)}", str(b.id)) for b in bookings]
    await _delete_from_list(app, "Select a booking to delete", options, app.client.delete_booking)
