"""
Terminal rendering of runtime display events using Rich.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from rich.console import Console
from rich.live import Live
from rich.markdown import Markdown
from rich.text import Text

from curiosity.protocol import EventType


@dataclass
class Printer:
    """
    Renders one conversation.

    The in-progress reply lives in a transient Live region so it can be replaced by
    the final Markdown rendering, or dropped when it turns out to be a tool call.
    """

    console: Console = field(default_factory=Console)
    accent: str = "green"
    echo_user: bool = False
    _live: Optional[Live] = None

    def handle(self, event: dict) -> None:
        kind = event.get("event")
        payload = event.get("payload") or {}
        text = str(payload.get("text", "") or "")

        if kind == EventType.USER_TURN:
            if self.echo_user:
                self.console.print(f"\n[bold cyan]You:[/bold cyan] {text}", highlight=False)
        elif kind == EventType.STREAM_UPDATE:
            self._show(Text(text))
        elif kind == EventType.STREAM_THINKING:
            self._show(Text(text, style="dim italic"))
        elif kind == EventType.STREAM_DISCARDED:
            self._stop()
        elif kind == EventType.ASSISTANT_FINAL:
            self._stop()
            self.console.print(f"\n[bold {self.accent}]Assistant:[/bold {self.accent}]")
            self.console.print(Markdown(text))
        elif kind == EventType.TOOL_USAGE:
            self._stop()
            self.console.print(f"[blue]🔧 {text}[/blue]", highlight=False)
        elif kind in (EventType.TOOL_ERROR, EventType.CAPABILITY_NOT_FOUND):
            self._stop()
            self.console.print(f"[yellow]⚠️  {text}[/yellow]", highlight=False)
        elif kind == EventType.TRANSPORT_ERROR:
            self._stop()
            self.console.print(f"\n[red]❌ Error: {text}[/red]", highlight=False)
        elif kind == EventType.TURN_REJECTED:
            self.console.print(f"[dim]{text}[/dim]", highlight=False)

    def cancelled(self) -> None:
        self._stop()
        self.console.print("\n[yellow]⚠️  Request cancelled[/yellow]")

    def close(self) -> None:
        self._stop()

    def _show(self, renderable: Text) -> None:
        if self._live is None:
            self._live = Live(renderable, console=self.console, refresh_per_second=12, transient=True)
            self._live.start()
        else:
            self._live.update(renderable)

    def _stop(self) -> None:
        if self._live is not None:
            self._live.stop()
            self._live = None
