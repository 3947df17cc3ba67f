from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from curiosity import config
from curiosity.runtime.capabilities import Capability
from curiosity.runtime.tool_calls import TOOL_REQUEST_CLOSE, TOOL_REQUEST_OPEN, format_tool_request

_PROMPT_PATH = Path(__file__).with_name("system.md")
_DEFAULT_PROMPT = "You are a helpful assistant."

TOOL_USAGE_SECTION = (
    "<tool-usage>If you have access to any tools, you can use them by including a tool call in your "
    f"message exactly as given in the <usage> section of each tool: the JSON object wrapped in "
    f"{TOOL_REQUEST_OPEN} and {TOOL_REQUEST_CLOSE}. The JSON object must include the toolUse and "
    "toolName properties, and args when the tool takes arguments. Only include one tool call per "
    "message. Do not include any other formatting inside the markers.</tool-usage>"
)


def _base_prompt(base_instructions: Optional[str] = None) -> str:
    if base_instructions and base_instructions.strip():
        return base_instructions.strip()
    configured = config.conversation_system_prompt()
    if configured:
        return configured
    try:
        text = _PROMPT_PATH.read_text(encoding="utf-8").strip()
        return text or _DEFAULT_PROMPT
    except Exception:
        return _DEFAULT_PROMPT


def _usage_example(capability: Capability) -> str:
    return format_tool_request(capability.name, dict(capability.arguments or {}))


def _tool_block(capability: Capability) -> str:
    return (
        "<tool>\n"
        f"<name>{capability.name}</name>\n"
        f"<description>{capability.description}</description>\n"
        "<usage>\n"
        f"{_usage_example(capability)}\n"
        "</usage>\n"
        "</tool>"
    )


def build_system_prompt(
    capabilities: Iterable[Capability],
    *,
    base_instructions: Optional[str] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Build the system preamble from the capabilities as they are right now.

    Nothing is cached: call it again after registering a capability and the new
    descriptor is there.
    """
    blocks: List[str] = [f"<system-prompt>{_base_prompt(base_instructions)}</system-prompt>"]

    caps = list(capabilities)
    if caps:
        blocks.append(TOOL_USAGE_SECTION)
        blocks.extend(_tool_block(c) for c in caps)

    ts = (now or datetime.now(timezone.utc)).isoformat()
    blocks.append(f"<current-time>{ts}</current-time>")
    return "\n".join(blocks)
