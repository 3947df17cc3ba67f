from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, List

import pytest

from curiosity.config import load_config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run every test in an empty working directory so no curiosity.json leaks in."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    load_config.cache_clear()
    yield tmp_path
    load_config.cache_clear()


@pytest.fixture
def write_config(isolated_config):
    def _write(data: Dict[str, Any]) -> None:
        (isolated_config / "curiosity.json").write_text(json.dumps(data), encoding="utf-8")
        load_config.cache_clear()

    return _write


class ScriptedProvider:
    """
    Plays back one scripted reply per stream_chat call.

    A reply is a string (one fragment), a list of fragments, or an exception. An
    exception inside a fragment list is raised after the fragments before it.
    """

    def __init__(self, *replies: Any):
        self.replies: List[Any] = list(replies)
        self.calls: List[List[Dict[str, str]]] = []

    async def stream_chat(self, *, messages):
        self.calls.append([dict(m) for m in messages])
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, str):
            reply = [reply]
        for fragment in reply:
            if isinstance(fragment, BaseException):
                raise fragment
            yield fragment


class GatedProvider:
    """Streams one fragment, then blocks until released."""

    def __init__(self, head: str = "Hel", tail: str = "lo"):
        self.head = head
        self.tail = tail
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.calls = 0

    async def stream_chat(self, *, messages):
        self.calls += 1
        yield self.head
        self.started.set()
        await self.release.wait()
        yield self.tail


async def collect(agen) -> list:
    return [item async for item in agen]


def kinds(events) -> List[str]:
    return [e["event"] for e in events]
