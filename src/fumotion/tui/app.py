"""Interactive application loop.

The loop asks the navigation controller which screen is current, renders
it and lets the screen handler call back into the controller. Handlers
report API failures as notices; nothing a handler raises short of a
keyboard interrupt ends the process.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from fumotion.client import FumotionClient
from fumotion.config import FumotionConfig
from fumotion.exceptions import FumotionAuthError, FumotionError
from fumotion.navigation import NavigationController, NavigationState, Screen
from fumotion.polling import PollingLoop
from fumotion.session import SessionStore
from fumotion.tui.screens import SCREENS
from fumotion.tui.ui import Ui

_logger = logging.getLogger(__name__)

ScreenHandler = Callable[["FumotionApp"], Awaitable[None]]


class FumotionApp:
    """Glue between the runtime core and the screen handlers."""

    def __init__(
        self,
        client: FumotionClient,
        nav: NavigationController,
        ui: Ui,
        screens: dict[Screen, ScreenHandler],
    ) -> None:
        self.client = client
        self.nav = nav
        self.ui = ui
        self._screens = screens
        self._notices: list[tuple[str, str]] = []
        self.running = True
        self.active_poll: PollingLoop | None = None
        nav.add_listener(self._on_navigate)

    @property
    def config(self) -> FumotionConfig:
        return self.client.config

    @property
    def store(self) -> SessionStore:
        return self.client.store

    def notice(self, kind: str, message: str) -> None:
        """Queue an alert shown under the header of the next render."""
        self._notices.append((kind, message))

    def report(self, exc: FumotionError) -> None:
        if isinstance(exc, FumotionAuthError):
            self.notice("error", f"{exc} (session expired, please log in again)")
        else:
            self.notice("error", str(exc) or type(exc).__name__)

    def quit(self) -> None:
        self.running = False

    def _on_navigate(self, previous: NavigationState, current: NavigationState) -> None:
        # Leaving the chat (or switching counterpart) must never leave its timer behind.
        if previous.screen is not Screen.CHAT or self.active_poll is None:
            return
        if current.screen is not Screen.CHAT or current.selected_user_id != self.active_poll.other_user_id:
            self.active_poll.cancel()

    def _render_frame(self) -> None:
        self.ui.clear()
        self.ui.header(self.store.get_user(), offline=self.nav.offline, base_url=self.config.base_url)
        notices, self._notices = self._notices, []
        for kind, message in notices:
            self.ui.alert(kind, message)

    async def run(self) -> None:
        """Render screens until the user quits. Starts on the loading screen."""
        try:
            while self.running:
                self._render_frame()
                handler = self._screens[self.nav.screen]
                try:
                    await handler(self)
                except FumotionError as exc:
                    _logger.debug("Unhandled error on %s", self.nav.screen, exc_info=True)
                    self.report(exc)
        except (KeyboardInterrupt, EOFError):
            _logger.debug("Interrupted, leaving")
        finally:
            if self.active_poll is not None:
                await self.active_poll.stop()


async def run_app(config: FumotionConfig) -> None:
    """Load the session, open the client and run the interactive loop."""
    store = SessionStore(config.config_path)
    store.load()
    async with FumotionClient(config, store=store) as client:
        app = FumotionApp(client, NavigationController(store), Ui(), SCREENS)
        await app.run()
