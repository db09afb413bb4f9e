"""Background refresh of a chat thread.

One :class:`PollingLoop` belongs to one open chat screen. It loads the
counterpart's profile and the full thread once, then re-fetches the thread
every ``interval`` seconds until it is stopped. Use it as an async context
manager so the timer is cancelled on every way out of the screen::

    async with PollingLoop(client, other_user_id, on_update=redraw) as poll:
        ...

A tick is skipped while the previous tick's fetch is still running, and
results that arrive after :meth:`PollingLoop.stop` are dropped.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from fumotion._constants import DEFAULT_POLL_INTERVAL
from fumotion.exceptions import FumotionError
from fumotion.models.message import Message
from fumotion.models.user import User

_logger = logging.getLogger(__name__)


class ThreadClient(Protocol):
    """The two client operations the loop relies on."""

    async def get_messages(self, other_user_id: int) -> list[Message]:
        ...

    async def get_public_profile(self, user_id: int) -> User:
        ...


class PollingLoop:
    """Keep ``messages`` in sync with the thread with *other_user_id*.

    Parameters
    ----------
    client : ThreadClient
        Usually a :class:`fumotion.client.FumotionClient`.
    other_user_id : int
        Counterpart of the conversation.
    interval : float
        Seconds between two ticks.
    on_update : callable, optional
        Called with the new message list after every successful fetch.
    sleep : callable, optional
        Awaitable sleep used by the timer; tests pass a fake clock.
    """

    def __init__(
        self,
        client: ThreadClient,
        other_user_id: int,
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
        on_update: Callable[[list[Message]], None] | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._other_user_id = other_user_id
        self._interval = interval
        self._on_update = on_update
        self._sleep = sleep
        self._timer: asyncio.Task[None] | None = None
        self._in_flight: asyncio.Task[None] | None = None
        self._stopped = False

        self.messages: list[Message] = []
        self.counterpart: User | None = None
        self.error: str | None = None
        self.loaded = False

    @property
    def other_user_id(self) -> int:
        return self._other_user_id

    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    async def __aenter__(self) -> PollingLoop:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    async def start(self) -> None:
        """Load profile and thread, then start the timer.

        A failed initial load is recorded in :attr:`error` for the screen
        to display; the timer starts regardless so the thread can recover.
        """
        if self._timer is not None or self._stopped:
            return
        try:
            counterpart, messages = await asyncio.gather(
                self._client.get_public_profile(self._other_user_id),
                self._client.get_messages(self._other_user_id),
                return_exceptions=True,
            )
        finally:
            self.loaded = True

        failures = [result for result in (counterpart, messages) if isinstance(result, BaseException)]
        for failure in failures:
            if not isinstance(failure, FumotionError):
                raise failure
        if failures:
            _logger.debug("Initial load of thread %s failed", self._other_user_id, exc_info=failures[0])
            self.error = str(failures[0]) or "Could not load the conversation"
        if not isinstance(counterpart, BaseException):
            self.counterpart = counterpart
        if not isinstance(messages, BaseException):
            self._apply(messages)

        if not self._stopped:
            self._timer = asyncio.create_task(self._run_timer(), name=f"poll-thread-{self._other_user_id}")

    async def refresh(self) -> bool:
        """Re-fetch the thread now. Failures are ignored like tick failures."""
        try:
            messages = await self._client.get_messages(self._other_user_id)
        except FumotionError:
            _logger.debug("Refresh of thread %s failed", self._other_user_id, exc_info=True)
            return False
        if self._stopped:
            return False
        self._apply(messages)
        return True

    def cancel(self) -> None:
        """Cancel the timer and any running fetch without waiting."""
        self._stopped = True
        for task in (self._timer, self._in_flight):
            if task is not None and not task.done():
                task.cancel()

    async def stop(self) -> None:
        """Cancel the timer and wait until it is gone. Idempotent."""
        self.cancel()
        tasks = [task for task in (self._timer, self._in_flight) if task is not None]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        _logger.debug("Polling of thread %s stopped", self._other_user_id)

    async def _run_timer(self) -> None:
        while not self._stopped:
            await self._sleep(self._interval)
            if self._stopped:
                return
            if self._in_flight is not None and not self._in_flight.done():
                _logger.debug("Previous fetch of thread %s still running, skipping tick", self._other_user_id)
                continue
            self._in_flight = asyncio.create_task(self._tick())

    async def _tick(self) -> None:
        await self.refresh()

    def _apply(self, messages: list[Message]) -> None:
        self.messages = messages
        if self._on_update is None:
            return
        try:
            self._on_update(messages)
        except Exception:
            _logger.debug("on_update callback failed", exc_info=True)
