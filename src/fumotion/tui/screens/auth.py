"""Login and registration screens."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fumotion.exceptions import FumotionError
from fumotion.navigation import Screen

if TYPE_CHECKING:
    from fumotion.tui.app import FumotionApp


async def login_screen(app: FumotionApp) -> None:
    app.ui.title("🔐 Log in")
    app.ui.hint("Leave the email empty to create an account, Ctrl-D to quit.")
    email = await app.ui.ask("Email")
    if not email:
        app.nav.transition(Screen.REGISTER)
        return
    password = await app.ui.ask("Password", password=True)
    try:
        user = await app.client.login(email, password)
    except FumotionError as exc:
        app.report(exc)
        return
    app.notice("success", f"Welcome back, {user.first_name or user.email}!")
    app.nav.transition(Screen.HOME)


async def register_screen(app: FumotionApp) -> None:
    app.ui.title("📝 Create an account")
    app.ui.hint("Leave the first name empty to go back to login.")
    first_name = await app.ui.ask("First name")
    if not first_name:
        app.nav.back()
        return
    last_name = await app.ui.ask("Last name")
    email = await app.ui.ask("Email")
    phone = await app.ui.ask("Phone (optional)")
    password = await app.ui.ask("Password", password=True)
    confirm = await app.ui.ask("Confirm password", password=True)
    try:
        await app.client.register(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password,
            confirm_password=confirm,
            phone=phone or None,
        )
    except FumotionError as exc:
        app.report(exc)
        return
    app.notice("success", "Account created")
    app.nav.transition(Screen.HOME)
