"""Trip screens: search, details, creation and the driver's own trips."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table

from fumotion.exceptions import FumotionError
from fumotion.models.trip import Trip, TripStatus
from fumotion.navigation import Screen
from fumotion.tui.ui import BACK, fmt_datetime, fmt_price

if TYPE_CHECKING:
    from fumotion.tui.app import FumotionApp

_STATUS_LABELS = {
    TripStatus.ACTIVE: "[green]● active[/green]",
    TripStatus.COMPLETED: "[blue]● completed[/blue]",
    TripStatus.CANCELLED: "[red]● cancelled[/red]",
}


def trip_label(trip: Trip) -> str:
    return (
        f"{trip.route}  {fmt_datetime(trip.departure_time)}  "
        f"{fmt_price(trip.price_per_seat)}  {trip.available_seats} seat(s)"
    )


async def search_screen(app: FumotionApp) -> None:
    app.ui.title("🔍 Search a trip")
    app.ui.hint("Leave a field empty to match anything.")
    departure = await app.ui.ask("Departure city")
    arrival = await app.ui.ask("Arrival city")
    date = await app.ui.ask("Date (YYYY-MM-DD)")
    try:
        result = await app.client.search_trips(departure=departure, arrival=arrival, date=date)
    except FumotionError as exc:
        app.report(exc)
        return

    if not result.trips:
        app.ui.alert("info", "No trip matches these criteria")
    options = [(trip_label(trip), str(trip.id)) for trip in result.trips]
    options.append(("🔍 New search", "search"))
    choice = await app.ui.choose(f"{result.total} trip(s) found", options)
    if choice == BACK:
        app.nav.transition(Screen.HOME)
    elif choice != "search":
        app.nav.transition(Screen.TRIP_DETAIL, trip_id=int(choice))


def _render_trip(app: FumotionApp, trip: Trip) -> None:
    table = Table.grid(padding=(0, 2))
    table.add_row("[cyan]From[/cyan]", f"{trip.departure_city}  [dim]{trip.departure_address}[/dim]")
    table.add_row("[cyan]To[/cyan]", f"{trip.arrival_city}  [dim]{trip.arrival_address}[/dim]")
    table.add_row("[cyan]When[/cyan]", fmt_datetime(trip.departure_time))
    table.add_row("[cyan]Price[/cyan]", f"{fmt_price(trip.price_per_seat)} / seat")
    table.add_row("[cyan]Seats left[/cyan]", str(trip.available_seats))
    table.add_row("[cyan]Status[/cyan]", _STATUS_LABELS.get(trip.status, trip.status.value))
    if trip.driver_name:
        table.add_row("[cyan]Driver[/cyan]", trip.driver_name)
    app.ui.console.print(Panel(table, title="🚗 Trip details", expand=False))


async def trip_detail_screen(app: FumotionApp) -> None:
    trip_id = app.nav.state.selected_trip_id
    if trip_id is None:
        app.nav.back()
        return
    try:
        trip = await app.client.get_trip(trip_id)
    except FumotionError as exc:
        app.report(exc)
        app.nav.back()
        return

    _render_trip(app, trip)
    user = app.store.get_user()
    is_driver = user is not None and user.id == trip.driver_id
    options = []
    if not is_driver and trip.is_bookable:
        options.append(("🎫 Book", "book"))
    if not is_driver:
        options.append(("💬 Contact the driver", "message"))

    choice = await app.ui.choose("Actions", options)
    if choice == BACK:
        app.nav.back()
    elif choice == "message":
        app.nav.transition(Screen.CHAT, user_id=trip.driver_id)
    elif choice == "book":
        await _book(app, trip)


async def _book(app: FumotionApp, trip: Trip) -> None:
    answer = await app.ui.ask(f"Seats (max {trip.available_seats})", default="1")
    try:
        seats = int(answer)
    except ValueError:
        app.notice("error", "Invalid number of seats")
        return
    try:
        await app.client.book_trip(trip, seats)
    except FumotionError as exc:
        app.report(exc)
        return
    app.notice("success", f"Booked {seats} seat(s), total {fmt_price(seats * trip.price_per_seat)}")


async def create_trip_screen(app: FumotionApp) -> None:
    app.ui.title("🚗 Offer a trip")
    app.ui.hint("Leave the departure city empty to go back.")
    departure_city = await app.ui.ask("Departure city")
    if not departure_city:
        app.nav.transition(Screen.HOME)
        return
    departure_address = await app.ui.ask("Departure address")
    arrival_city = await app.ui.ask("Arrival city")
    arrival_address = await app.ui.ask("Arrival address")
    date = await app.ui.ask("Date (YYYY-MM-DD)")
    time = await app.ui.ask("Time (HH:MM)")
    seats_text = await app.ui.ask("Seats", default="3")
    price_text = await app.ui.ask("Price per seat (€)", default="5")
    try:
        seats = int(seats_text)
        price = float(price_text.replace(",", "."))
    except ValueError:
        app.notice("error", "Seats must be a whole number and price a number")
        return

    confirm = await app.ui.ask(f"Publish {departure_city} → {arrival_city} on {date} at {time}? [y/N]")
    if confirm.lower() not in {"y", "yes"}:
        app.notice("info", "Trip not published")
        app.nav.transition(Screen.HOME)
        return
    try:
        await app.client.create_trip(
            departure_city=departure_city,
            departure_address=departure_address,
            arrival_city=arrival_city,
            arrival_address=arrival_address,
            date=date,
            time=time,
            available_seats=seats,
            price_per_seat=price,
        )
    except FumotionError as exc:
        app.report(exc)
        return
    app.notice("success", "Trip published")
    app.nav.transition(Screen.MY_TRIPS)


async def my_trips_screen(app: FumotionApp) -> None:
    app.ui.title("📋 My trips")
    try:
        trips = await app.client.get_my_trips()
    except FumotionError as exc:
        app.report(exc)
        app.nav.transition(Screen.HOME)
        return
    if not trips:
        app.ui.alert("info", "You have not offered any trip yet")

    options = [(f"{trip_label(trip)}  [{trip.status.value}]", str(trip.id)) for trip in trips]
    choice = await app.ui.choose("Select a trip", options)
    if choice == BACK:
        app.nav.transition(Screen.HOME)
        return

    trip = next(trip for trip in trips if str(trip.id) == choice)
    actions = [("🔎 Details", "detail")]
    if trip.status is TripStatus.ACTIVE:
        actions += [("✔ Mark as completed", "complete"), ("✖ Cancel trip", "cancel")]
    action = await app.ui.choose(trip.route, actions)
    try:
        if action == "detail":
            app.nav.transition(Screen.TRIP_DETAIL, trip_id=trip.id)
        elif action == "complete":
            await app.client.complete_trip(trip.id)
            app.notice("success", "Trip marked as completed")
        elif action == "cancel":
            await app.client.cancel_trip(trip.id)
            app.notice("success", "Trip cancelled")
    except FumotionError as exc:
        app.report(exc)
