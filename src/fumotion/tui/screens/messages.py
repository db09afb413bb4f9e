"""Conversation list and the live chat screen."""

from __future__ import annotations

from typing import TYPE_CHECKING

from prompt_toolkit.patch_stdout import patch_stdout
from rich.text import Text

from fumotion.exceptions import FumotionError
from fumotion.models.message import Message
from fumotion.navigation import Screen
from fumotion.polling import PollingLoop
from fumotion.tui.ui import BACK, fmt_time

if TYPE_CHECKING:
    from fumotion.tui.app import FumotionApp

_VISIBLE_ON_OPEN = 10


async def conversations_screen(app: FumotionApp) -> None:
    app.ui.title("💬 Messages")
    try:
        conversations = await app.client.get_conversations()
    except FumotionError as exc:
        app.report(exc)
        app.nav.transition(Screen.HOME)
        return
    if not conversations:
        app.ui.alert("info", "No conversation yet")

    options = []
    for conv in conversations:
        unread = f" ({conv.unread_count} new)" if conv.unread_count else ""
        options.append((f"{conv.full_name}{unread}: {conv.last_message[:40]}", str(conv.user_id)))
    choice = await app.ui.choose("Select a conversation", options)
    if choice == BACK:
        app.nav.transition(Screen.HOME)
    else:
        app.nav.transition(Screen.CHAT, user_id=int(choice))


async def chat_screen(app: FumotionApp) -> None:
    other_id = app.nav.state.selected_user_id
    if other_id is None:
        app.nav.back()
        return

    me = app.store.get_user()
    shown: set[int] = set()
    titled = False

    def show(messages: list[Message]) -> None:
        # Updates arriving before the title is printed are rendered right after it.
        if not titled:
            return
        fresh = [m for m in messages if m.id not in shown]
        if not shown:
            fresh = fresh[-_VISIBLE_ON_OPEN:]
        shown.update(m.id for m in messages)
        name = poll.counterpart.first_name if poll.counterpart is not None else "Them"
        for m in fresh:
            mine = me is not None and m.sender_id == me.id
            line = Text(f"{'You' if mine else name}: ", style="cyan" if mine else "bold")
            line.append(m.message)
            line.append(f" ({fmt_time(m.created_at)})", style="dim")
            app.ui.console.print(line)

    poll = PollingLoop(app.client, other_id, interval=app.config.poll_interval, on_update=show)
    app.active_poll = poll
    try:
        with patch_stdout():
            async with poll:
                who = poll.counterpart.full_name if poll.counterpart is not None else f"User #{other_id}"
                app.ui.title(f"💬 Conversation with {who}")
                titled = True
                show(poll.messages)
                if poll.error:
                    app.ui.alert("error", poll.error)
                elif not poll.messages:
                    app.ui.hint("No message yet, say hello!")
                app.ui.hint(f"Enter to send, empty line to go back. Refreshes every {app.config.poll_interval:g}s.")
                await _chat_input(app, poll, other_id)
    finally:
        app.active_poll = None


async def _chat_input(app: FumotionApp, poll: PollingLoop, other_id: int) -> None:
    while app.nav.screen is Screen.CHAT and app.nav.state.selected_user_id == other_id:
        text = await app.ui.ask("Message")
        if not text:
            app.nav.back()
            return
        try:
            await app.client.send_message(other_id, text)
        except FumotionError as exc:
            app.ui.alert("error", str(exc))
            continue
        await poll.refresh()
