"""Session state management for authenticated API calls.

The session (bearer token + user record) lives in a single JSON file under
the user's home directory. :class:`SessionStore` keeps an in-memory copy
which is the source of truth for the running process; every mutation is
written through to disk immediately, and disk errors are never surfaced.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from fumotion._constants import CONFIG_FILE
from fumotion.models.user import User

_logger = logging.getLogger(__name__)


class Session(BaseModel):
    """Authentication state: a bearer token and the user it belongs to.

    Parameters
    ----------
    token : str or None
        Bearer credential attached to every request.
    user : User or None
        The authenticated account.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    token: str | None = None
    user: User | None = None

    @property
    def is_authenticated(self) -> bool:
        """A half-populated session counts as logged out."""
        return bool(self.token) and self.user is not None


class SessionStore:
    """Persistent, write-through cache of the current :class:`Session`.

    The application creates one store at start-up and calls :meth:`load`
    once; all other components read through the accessors.
    """

    def __init__(self, path: Path | str = CONFIG_FILE) -> None:
        self._path = Path(path).expanduser()
        self._session = Session()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def session(self) -> Session:
        return self._session

    def load(self) -> Session:
        """Read the persisted session into the cache.

        A missing, unreadable or malformed file yields an empty session.
        """
        try:
            text = self._path.read_text(encoding="utf-8")
            session = Session.model_validate_json(text)
        except (OSError, ValueError):
            # JSONDecodeError and pydantic's ValidationError are ValueErrors.
            _logger.debug("No usable session at %s", self._path, exc_info=True)
            session = Session()
        self._session = session
        return session

    def save(self, session: Session) -> None:
        """Overwrite the persisted record (best effort)."""
        self._session = session
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(session.model_dump_json(indent=2), encoding="utf-8")
        except OSError:
            _logger.debug("Could not persist session to %s", self._path, exc_info=True)

    def get_token(self) -> str | None:
        return self._session.token

    def get_user(self) -> User | None:
        return self._session.user

    def set_token(self, token: str | None) -> None:
        self.save(self._session.model_copy(update={"token": token}))

    def set_user(self, user: User | None) -> None:
        self.save(self._session.model_copy(update={"user": user}))

    def set_session(self, token: str, user: User) -> None:
        """Replace token and user in a single write."""
        self.save(Session(token=token, user=user))

    def clear(self) -> None:
        self.save(Session())

    def is_authenticated(self) -> bool:
        return self._session.is_authenticated
