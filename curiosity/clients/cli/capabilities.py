from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List

from curiosity.clients.common.printer import Printer
from curiosity.runtime.capabilities import Capability, action, query

ACCENT_COLORS = ("green", "cyan", "magenta", "yellow", "blue", "red", "white")


def default_capabilities(printer: Printer) -> List[Capability]:
    """Capabilities the bundled CLI registers: a clock query and an accent-colour action."""

    def current_time(_args: Dict[str, Any]) -> str:
        return datetime.now().astimezone().isoformat(timespec="seconds")

    def set_accent_color(args: Dict[str, Any]) -> None:
        color = str(args.get("color", "")).strip().lower()
        if color not in ACCENT_COLORS:
            raise ValueError(f"unsupported color: {color!r}")
        printer.accent = color

    return [
        query(
            "currentTime",
            "Returns the user's local date and time.",
            current_time,
        ),
        action(
            "setAccentColor",
            f"Changes the colour of the assistant label in the terminal. One of: {', '.join(ACCENT_COLORS)}.",
            set_accent_color,
            arguments={"color": "colour name"},
        ),
    ]
