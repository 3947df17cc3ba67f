from __future__ import annotations

from typing import Any, Dict, Optional


class EventType:
    USER_TURN = "turn.user"
    TURN_REJECTED = "turn.rejected"
    STREAM_UPDATE = "stream.update"
    STREAM_THINKING = "stream.thinking"
    STREAM_DISCARDED = "stream.discarded"
    ASSISTANT_FINAL = "assistant.final"
    TOOL_USAGE = "tool.usage"
    TOOL_ERROR = "tool.error"
    TRANSPORT_ERROR = "transport.error"
    CAPABILITY_NOT_FOUND = "capability.not_found"


def create_event(event: str, payload: Dict[str, Any], seq: Optional[int] = None) -> dict:
    return {"type": "event", "event": event, "payload": payload, "seq": seq}
