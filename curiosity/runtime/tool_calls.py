"""
Tool-call envelope handling.

The backend asks for a capability by embedding a delimited JSON object in its reply:

    [TOOL_REQUEST]{"toolUse": true, "toolName": "<name>", "args": {...}}[END_TOOL_REQUEST]

Only the delimited form is recognised. A reply that is nothing but a JSON object is
ordinary prose; accepting both forms would let a JSON answer pass as a tool call.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

TOOL_REQUEST_OPEN = "[TOOL_REQUEST]"
TOOL_REQUEST_CLOSE = "[END_TOOL_REQUEST]"
TOOL_RESPONSE_OPEN = "<tool-response>"
TOOL_RESPONSE_CLOSE = "</tool-response>"

_FENCE_RE = re.compile(r"^```[a-zA-Z0-9_-]*\s*\n?(.*?)\n?\s*```$", re.DOTALL)


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class ToolRequest:
    tool_name: str
    args: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MalformedToolPayload:
    payload: str
    reason: str


ToolCallResult = Union[PlainText, ToolRequest, MalformedToolPayload]


def format_tool_request(tool_name: str, args: Optional[Dict[str, Any]] = None) -> str:
    body: Dict[str, Any] = {"toolUse": True, "toolName": tool_name}
    if args:
        body["args"] = args
    return f"{TOOL_REQUEST_OPEN}{json.dumps(body, ensure_ascii=False)}{TOOL_REQUEST_CLOSE}"


def format_tool_response(result: Any) -> str:
    return f"{TOOL_RESPONSE_OPEN}{json.dumps(result, ensure_ascii=False, default=str)}{TOOL_RESPONSE_CLOSE}"


def _strip_fence(payload: str) -> str:
    m = _FENCE_RE.match(payload)
    if m:
        return m.group(1).strip()
    return payload


def extract_tool_call(text: str) -> ToolCallResult:
    start = text.find(TOOL_REQUEST_OPEN)
    if start == -1:
        return PlainText(text)
    body_start = start + len(TOOL_REQUEST_OPEN)
    end = text.find(TOOL_REQUEST_CLOSE, body_start)
    if end == -1:
        return PlainText(text)

    payload = _strip_fence(text[body_start:end].strip())
    if not payload:
        return PlainText(text)

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        return MalformedToolPayload(payload, f"invalid JSON: {e.msg}")

    if not isinstance(data, dict):
        return MalformedToolPayload(payload, "payload is not an object")
    if "toolUse" not in data or "toolName" not in data:
        return MalformedToolPayload(payload, "missing toolUse or toolName")

    tool_name = data.get("toolName")
    if not isinstance(tool_name, str) or not tool_name.strip():
        return MalformedToolPayload(payload, "toolName must be a non-empty string")

    args = data.get("args")
    if args is None:
        args = {}
    if not isinstance(args, dict):
        return MalformedToolPayload(payload, "args must be an object")

    return ToolRequest(tool_name=tool_name.strip(), args=args)
