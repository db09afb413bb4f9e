"""Internal constants shared across the library."""

from pathlib import Path

BASE_URL = "https://fumotion.tech"
USER_AGENT = "fumotion-tui/python"
CONFIG_DIR = Path.home() / ".fumotion-tui"
CONFIG_FILE = CONFIG_DIR / "config.json"

#: Seconds between two message-thread refreshes on the chat screen.
DEFAULT_POLL_INTERVAL: float = 5.0

HEALTH_ENDPOINT = "/api/health"
