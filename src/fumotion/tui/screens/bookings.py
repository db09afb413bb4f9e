"""Passenger bookings and the driver's received booking requests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fumotion.exceptions import FumotionError
from fumotion.models.booking import Booking, BookingStatus
from fumotion.navigation import Screen
from fumotion.tui.ui import BACK, fmt_datetime

if TYPE_CHECKING:
    from fumotion.tui.app import FumotionApp

_STATUS_ICONS = {
    BookingStatus.PENDING: "🟡",
    BookingStatus.CONFIRMED: "🟢",
    BookingStatus.CANCELLED: "🔴",
    BookingStatus.REJECTED: "⛔",
}


def booking_label(booking: Booking) -> str:
    icon = _STATUS_ICONS.get(booking.status, "❓")
    route = booking.trip.route if booking.trip is not None else f"Trip #{booking.trip_id}"
    when = fmt_datetime(booking.trip.departure_time) if booking.trip is not None else ""
    who = f"  {booking.passenger.full_name}" if booking.passenger is not None else ""
    return f"{icon} {route}  {when}  {booking.seats_booked} seat(s){who}  [{booking.status.value}]"


async def bookings_screen(app: FumotionApp) -> None:
    app.ui.title("🎫 My bookings")
    try:
        bookings = await app.client.get_my_bookings()
    except FumotionError as exc:
        app.report(exc)
        app.nav.transition(Screen.HOME)
        return
    if not bookings:
        app.ui.alert("info", "No booking yet")

    choice = await app.ui.choose("Select a booking", [(booking_label(b), str(b.id)) for b in bookings])
    if choice == BACK:
        app.nav.transition(Screen.HOME)
        return

    booking = next(b for b in bookings if str(b.id) == choice)
    actions = [("🔎 Trip details", "detail")]
    if booking.status in (BookingStatus.PENDING, BookingStatus.CONFIRMED):
        actions.append(("✖ Cancel booking", "cancel"))
    action = await app.ui.choose("Actions", actions)
    if action == "detail":
        app.nav.transition(Screen.TRIP_DETAIL, trip_id=booking.trip_id)
    elif action == "cancel":
        try:
            await app.client.cancel_booking(booking.id)
        except FumotionError as exc:
            app.report(exc)
            return
        app.notice("success", "Booking cancelled")


async def received_bookings_screen(app: FumotionApp) -> None:
    app.ui.title("📨 Booking requests")
    try:
        bookings = await app.client.get_bookings_for_my_trips()
    except FumotionError as exc:
        app.report(exc)
        app.nav.transition(Screen.HOME)
        return
    if not bookings:
        app.ui.alert("info", "No booking request on your trips")

    choice = await app.ui.choose("Select a request", [(booking_label(b), str(b.id)) for b in bookings])
    if choice == BACK:
        app.nav.transition(Screen.HOME)
        return

    booking = next(b for b in bookings if str(b.id) == choice)
    actions = []
    if booking.is_pending:
        actions += [("✔ Accept", "confirmed"), ("✖ Decline", "rejected")]
    actions.append(("💬 Message the passenger", "message"))
    action = await app.ui.choose("Actions", actions)
    if action == "message":
        app.nav.transition(Screen.CHAT, user_id=booking.passenger_id)
    elif action in ("confirmed", "rejected"):
        try:
            await app.client.update_booking_status(booking.id, action)
        except FumotionError as exc:
            app.report(exc)
            return
        app.notice("success", "Booking accepted" if action == "confirmed" else "Booking declined")
