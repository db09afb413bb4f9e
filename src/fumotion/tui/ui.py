"""Console primitives shared by every screen: prompts, menus, alerts."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from prompt_toolkit import PromptSession
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from fumotion.models.user import User

_ALERT_STYLES = {
    "error": ("✗", "bold red"),
    "success": ("✓", "bold green"),
    "warning": ("⚠", "bold yellow"),
    "info": ("ℹ", "cyan"),
}

BACK = "back"


def fmt_datetime(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.strftime("%a %d %b %Y %H:%M")


def fmt_time(value: datetime | None) -> str:
    return value.strftime("%H:%M") if value is not None else ""


def fmt_price(value: float) -> str:
    return f"{value:g}€"


class Ui:
    """Thin wrapper around a rich console and a prompt_toolkit session."""

    def __init__(self, console: Console | None = None, prompt: PromptSession[str] | None = None) -> None:
        self.console = console or Console()
        self._prompt = prompt or PromptSession()

    def clear(self) -> None:
        self.console.clear()

    def header(self, user: User | None, *, offline: bool, base_url: str) -> None:
        title = Text("🚗 Fumotion", style="bold cyan")
        if user is not None:
            title.append(f"  ·  {user.full_name}", style="green")
            if user.is_admin:
                title.append(" (admin)", style="yellow")
        self.console.print(Panel(title, expand=False))
        if offline:
            self.alert("warning", f"API unreachable ({base_url})")

    def title(self, text: str) -> None:
        self.console.print(Text(text, style="bold cyan"))

    def alert(self, kind: str, message: str) -> None:
        icon, style = _ALERT_STYLES.get(kind, _ALERT_STYLES["info"])
        self.console.print(Text(f"{icon} {message}", style=style))

    def hint(self, text: str) -> None:
        self.console.print(Text(text, style="dim"))

    async def ask(self, label: str, *, default: str = "", password: bool = False) -> str:
        """Read one line; Ctrl-C/Ctrl-D propagate as KeyboardInterrupt/EOFError."""
        answer: str = await self._prompt.prompt_async(f"{label}: ", default=default, is_password=password)
        return answer.strip()

    async def choose(self, title: str, options: Sequence[tuple[str, str]], *, back: bool = True) -> str:
        """Numbered menu. Returns the chosen value, or ``BACK``."""
        self.console.print(Text(title, style="bold"))
        for index, (label, _) in enumerate(options, start=1):
            self.console.print(Text.assemble("  ", (f"{index:>2}", "cyan"), "  ", label))
        if back:
            self.console.print(Text.assemble("  ", (" 0", "cyan"), "  ← Back"))
        while True:
            answer = await self.ask("Choice")
            if back and answer in {"", "0", "b"}:
                return BACK
            if answer.isdecimal() and 1 <= int(answer) <= len(options):
                return options[int(answer) - 1][1]
            self.alert("error", "Unknown choice")
