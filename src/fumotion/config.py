"""Client configuration for fumotion."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from fumotion._constants import BASE_URL, CONFIG_FILE, DEFAULT_POLL_INTERVAL
from fumotion.exceptions import FumotionConfigError


@dataclasses.dataclass(frozen=True)
class FumotionConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Root address of the Fumotion API. Endpoint paths (``/api/...``)
        are appended to it verbatim.
    config_path : Path
        Where the session record (token + user) is persisted.
    poll_interval : float
        Seconds between two message-thread refreshes on the chat screen.
    log_level : str
        Name of the root logging level used by the terminal application.
    log_file : Path or None
        Send log records to this file instead of stderr. Useful since the
        interactive screen owns the terminal.
    """

    base_url: str = BASE_URL
    config_path: Path = CONFIG_FILE
    poll_interval: float = DEFAULT_POLL_INTERVAL
    log_level: str = "WARNING"
    log_file: Path | None = None

    def __post_init__(self) -> None:
        if not self.base_url:
            raise FumotionConfigError("base_url must be non-empty")
        if self.poll_interval <= 0:
            raise FumotionConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        # Normalise so endpoint paths can be appended directly.
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "config_path", Path(self.config_path).expanduser())
        if self.log_file is not None:
            object.__setattr__(self, "log_file", Path(self.log_file).expanduser())

    @classmethod
    def from_env(cls, **overrides: Any) -> FumotionConfig:
        """Create configuration from environment variables.

        Reads ``FUMOTION_API_URL`` (falling back to ``API_URL``),
        ``FUMOTION_CONFIG_PATH``, ``FUMOTION_POLL_INTERVAL``,
        ``FUMOTION_LOG_LEVEL`` and ``FUMOTION_LOG_FILE``. Explicit keyword
        arguments override environment values; ``None`` overrides are
        ignored so argparse defaults can be passed straight through.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("FUMOTION_API_URL") or env.get("API_URL")
        if base_url:
            config_kwargs["base_url"] = base_url

        _ENV_CONFIG_MAP = {
            "FUMOTION_CONFIG_PATH": "config_path",
            "FUMOTION_LOG_LEVEL": "log_level",
            "FUMOTION_LOG_FILE": "log_file",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val:
                config_kwargs[field_name] = val

        interval_env = env.get("FUMOTION_POLL_INTERVAL")
        if interval_env is not None and overrides.get("poll_interval") is None:
            try:
                config_kwargs["poll_interval"] = float(interval_env)
            except ValueError as exc:
                raise FumotionConfigError(f"FUMOTION_POLL_INTERVAL is not a number: {interval_env!r}") from exc

        config_kwargs.update({key: value for key, value in overrides.items() if value is not None})

        return cls(**config_kwargs)
