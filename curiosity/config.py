from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional


@lru_cache(maxsize=1)
def load_config(path: str = "curiosity.json") -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _get(cfg: Dict[str, Any], *path: str, default: Any = None) -> Any:
    cur: Any = cfg
    for k in path:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


def llm_base_url() -> Optional[str]:
    cfg = load_config()
    v = _get(cfg, "llm", "base_url", default="http://localhost:1234/v1")
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def llm_model_name() -> str:
    cfg = load_config()
    return str(_get(cfg, "llm", "model_name", default="llama-3.2-1b-instruct"))


def llm_temperature() -> float:
    cfg = load_config()
    try:
        return float(_get(cfg, "llm", "temperature", default=0.7))
    except Exception:
        return 0.7


def llm_api_key() -> str:
    cfg = load_config()
    v = _get(cfg, "llm", "api_key", default=None)
    if v:
        return str(v)
    return os.getenv("OPENAI_API_KEY", "")


def llm_strip_reasoning() -> bool:
    cfg = load_config()
    return bool(_get(cfg, "llm", "strip_reasoning", default=False))


def llm_tool_role() -> str:
    """
    Role used when sending tool-result turns to the backend.

    Chat Completions endpoints reject a bare "tool" message without a tool_call_id,
    so results go out as "user" content unless configured otherwise.
    """
    cfg = load_config()
    v = str(_get(cfg, "llm", "tool_role", default="user") or "user").strip().lower()
    return v if v in ("user", "tool", "system") else "user"


def conversation_system_prompt() -> Optional[str]:
    cfg = load_config()
    v = _get(cfg, "conversation", "system_prompt", default=None)
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def conversation_max_tool_rounds() -> int:
    cfg = load_config()
    try:
        return max(0, int(_get(cfg, "conversation", "max_tool_rounds", default=5)))
    except Exception:
        return 5


def log_level() -> str:
    cfg = load_config()
    return str(_get(cfg, "logging", "level", default="WARNING") or "WARNING").upper()
