"""Screen-to-screen navigation as a small state machine.

:class:`NavigationController` owns the single :class:`NavigationState` of
the process. The only way to change it is :meth:`NavigationController.transition`
(and the helpers built on it), which applies two rules:

* **Sticky parameters.** ``trip_id`` / ``user_id`` passed to a transition
  replace the selected ids; ids that are not passed keep their previous
  value. Leaving ``trip-detail`` for ``home`` therefore still remembers
  the trip, and coming back to ``trip-detail`` shows it again.
* **Authentication guard.** Any screen other than loading/login/register
  requires an authenticated session; without one the transition lands on
  ``login`` instead.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from enum import StrEnum

from fumotion.session import SessionStore

_logger = logging.getLogger(__name__)


class Screen(StrEnum):
    LOADING = "loading"
    LOGIN = "login"
    REGISTER = "register"
    HOME = "home"
    SEARCH = "search"
    TRIP_DETAIL = "trip-detail"
    CREATE_TRIP = "create-trip"
    MY_TRIPS = "my-trips"
    BOOKINGS = "bookings"
    RECEIVED_BOOKINGS = "received-bookings"
    CONVERSATIONS = "conversations"
    CHAT = "chat"
    REVIEWS = "reviews"
    PROFILE = "profile"
    ADMIN = "admin"
    ADMIN_USERS = "admin-users"
    ADMIN_TRIPS = "admin-trips"
    ADMIN_BOOKINGS = "admin-bookings"


PUBLIC_SCREENS: frozenset[Screen] = frozenset({Screen.LOADING, Screen.LOGIN, Screen.REGISTER})
PROTECTED_SCREENS: frozenset[Screen] = frozenset(Screen) - PUBLIC_SCREENS

# Where "back" leads from each screen; anything not listed goes home.
_BACK_TARGETS: dict[Screen, Screen] = {
    Screen.LOADING: Screen.LOGIN,
    Screen.LOGIN: Screen.LOGIN,
    Screen.REGISTER: Screen.LOGIN,
    Screen.TRIP_DETAIL: Screen.SEARCH,
    Screen.CHAT: Screen.CONVERSATIONS,
    Screen.ADMIN_USERS: Screen.ADMIN,
    Screen.ADMIN_TRIPS: Screen.ADMIN,
    Screen.ADMIN_BOOKINGS: Screen.ADMIN,
}


@dataclass(frozen=True, slots=True)
class NavigationState:
    """Current screen plus the sticky selection parameters."""

    screen: Screen = Screen.LOADING
    selected_trip_id: int | None = None
    selected_user_id: int | None = None


#: Called with ``(previous, current)`` after every transition.
NavigationListener = Callable[[NavigationState, NavigationState], None]


class NavigationController:
    """Finite-state machine over :class:`Screen` values."""

    def __init__(self, store: SessionStore) -> None:
        self._store = store
        self._state = NavigationState()
        self._offline = False
        self._listeners: list[NavigationListener] = []

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def screen(self) -> Screen:
        return self._state.screen

    @property
    def offline(self) -> bool:
        """``True`` when the start-up probe could not reach the API."""
        return self._offline

    def add_listener(self, listener: NavigationListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def transition(
        self,
        target: Screen | str,
        *,
        trip_id: int | None = None,
        user_id: int | None = None,
    ) -> NavigationState:
        """Move to *target*, merging the sticky parameters.

        Returns the new state, whose screen is ``login`` when *target* is
        protected and no session is active.
        """
        screen = Screen(target)
        if screen in PROTECTED_SCREENS and not self._store.is_authenticated():
            _logger.debug("No session, redirecting %s to %s", screen, Screen.LOGIN)
            screen = Screen.LOGIN

        previous = self._state
        self._state = replace(
            previous,
            screen=screen,
            selected_trip_id=trip_id if trip_id is not None else previous.selected_trip_id,
            selected_user_id=user_id if user_id is not None else previous.selected_user_id,
        )
        _logger.debug("Navigation %s -> %s", previous, self._state)
        self._notify(previous, self._state)
        return self._state

    def back(self) -> NavigationState:
        """Go to the parent of the current screen."""
        return self.transition(_BACK_TARGETS.get(self._state.screen, Screen.HOME))

    async def startup(self, probe: Callable[[], Awaitable[bool]]) -> NavigationState:
        """Leave the ``loading`` state once the API reachability is known.

        Unreachable API: the offline flag is raised and the user lands on
        login, so a cached session is not used blindly. Reachable API: home
        when a session is persisted, login otherwise.
        """
        online = await probe()
        self._offline = not online
        if not online:
            _logger.warning("API unreachable, starting offline")
            return self.transition(Screen.LOGIN)
        if self._store.is_authenticated():
            return self.transition(Screen.HOME)
        return self.transition(Screen.LOGIN)

    def logout(self) -> NavigationState:
        """Drop the session and go to the login screen."""
        self._store.clear()
        return self.transition(Screen.LOGIN)

    def _notify(self, previous: NavigationState, current: NavigationState) -> None:
        for listener in list(self._listeners):
            try:
                listener(previous, current)
            except Exception:
                _logger.debug("Navigation listener failed", exc_info=True)
