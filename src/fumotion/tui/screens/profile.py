"""Current user's profile."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table

from fumotion.exceptions import FumotionError
from fumotion.navigation import Screen
from fumotion.tui.ui import BACK, fmt_datetime

if TYPE_CHECKING:
    from fumotion.tui.app import FumotionApp

_EDITABLE = (("first_name", "First name"), ("last_name", "Last name"), ("phone", "Phone"))


async def profile_screen(app: FumotionApp) -> None:
    app.ui.title("👤 My profile")
    try:
        user = await app.client.get_profile()
        reviews = await app.client.get_user_reviews(user.id)
    except FumotionError as exc:
        app.report(exc)
        app.nav.transition(Screen.HOME)
        return

    table = Table.grid(padding=(0, 2))
    table.add_row("[cyan]Name[/cyan]", user.full_name)
    table.add_row("[cyan]Email[/cyan]", user.email)
    table.add_row("[cyan]Phone[/cyan]", user.phone or "-")
    table.add_row("[cyan]Member since[/cyan]", fmt_datetime(user.created_at))
    if reviews.reviews:
        table.add_row("[cyan]Rating[/cyan]", f"{reviews.average:.1f}/5 ({len(reviews.reviews)} review(s))")
    else:
        table.add_row("[cyan]Rating[/cyan]", "no review yet")
    app.ui.console.print(Panel(table, expand=False))

    choice = await app.ui.choose("Actions", [("✏ Edit", "edit")])
    if choice == BACK:
        app.nav.transition(Screen.HOME)
        return

    app.ui.hint("Press enter to keep the current value.")
    fields = {}
    for name, label in _EDITABLE:
        current = getattr(user, name) or ""
        value = await app.ui.ask(label, default=current)
        if value != current:
            fields[name] = value
    if not fields:
        app.notice("info", "Nothing changed")
        return
    try:
        await app.client.update_profile(**fields)
    except FumotionError as exc:
        app.report(exc)
        return
    app.notice("success", "Profile updated")
