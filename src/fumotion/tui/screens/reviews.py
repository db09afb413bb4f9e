"""Reviews owed after completed trips."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fumotion.exceptions import FumotionError
from fumotion.navigation import Screen
from fumotion.tui.screens.bookings import booking_label
from fumotion.tui.ui import BACK

if TYPE_CHECKING:
    from fumotion.tui.app import FumotionApp


async def reviews_screen(app: FumotionApp) -> None:
    app.ui.title("⭐ Reviews to leave")
    try:
        pending = await app.client.get_pending_reviews()
    except FumotionError as exc:
        app.report(exc)
        app.nav.transition(Screen.HOME)
        return
    if not pending:
        app.ui.alert("info", "Nothing to review")

    choice = await app.ui.choose("Select a trip", [(booking_label(b), str(b.id)) for b in pending])
    if choice == BACK:
        app.nav.transition(Screen.HOME)
        return

    rating_text = await app.ui.ask("Rating (1-5)", default="5")
    try:
        rating = int(rating_text)
    except ValueError:
        app.notice("error", "Rating must be a number between 1 and 5")
        return
    comment = await app.ui.ask("Comment (optional)")
    try:
        await app.client.create_review(int(choice), rating, comment or None)
    except FumotionError as exc:
        app.report(exc)
        return
    app.notice("success", "Thanks for your review")
