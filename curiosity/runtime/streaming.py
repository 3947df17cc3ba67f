from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AsyncIterator, Optional, Tuple

from curiosity.runtime.llm.provider import ErrorCategory, TransportError

logger = logging.getLogger("curiosity.streaming")


@dataclass(frozen=True)
class StreamUpdate:
    text: str
    thinking: bool = False


def _partial_tag_len(buf: str, tag: str) -> int:
    """Length of the longest suffix of buf that is a proper prefix of tag."""
    for n in range(min(len(buf), len(tag) - 1), 0, -1):
        if buf.endswith(tag[:n]):
            return n
    return 0


class ReasoningSeparator:
    """
    Splits reasoning-model output into hidden reasoning and visible text.

    Models like DeepSeek-R1 wrap their chain of thought in <think>...</think>.
    Tags may arrive split across fragments, so a possible partial tag at the end of
    the buffer is held back until the next fragment decides it.
    """

    def __init__(self, open_tag: str = "<think>", close_tag: str = "</think>"):
        self.open_tag = open_tag
        self.close_tag = close_tag
        self.reasoning = False
        self._buf = ""

    def feed(self, fragment: str) -> Tuple[str, bool]:
        self._buf += fragment
        visible = ""
        while True:
            if self.reasoning:
                idx = self._buf.find(self.close_tag)
                if idx == -1:
                    keep = _partial_tag_len(self._buf, self.close_tag)
                    self._buf = self._buf[len(self._buf) - keep:] if keep else ""
                    break
                self._buf = self._buf[idx + len(self.close_tag):]
                self.reasoning = False
            else:
                idx = self._buf.find(self.open_tag)
                if idx == -1:
                    keep = _partial_tag_len(self._buf, self.open_tag)
                    cut = len(self._buf) - keep
                    visible += self._buf[:cut]
                    self._buf = self._buf[cut:]
                    break
                visible += self._buf[:idx]
                self._buf = self._buf[idx + len(self.open_tag):]
                self.reasoning = True
        return visible, self.reasoning

    def flush(self) -> str:
        rest = "" if self.reasoning else self._buf
        self._buf = ""
        return rest


class StreamAggregator:
    """
    Concatenates a provider's fragments and reports the running total after each one.

    Usage:
        agg = StreamAggregator()
        async for update in agg.stream(provider.stream_chat(messages=...)):
            render(update.text)
        final = agg.text

    A failing source surfaces as TransportError and the partial text is dropped.
    """

    def __init__(self, reasoning: Optional[ReasoningSeparator] = None):
        self.reasoning = reasoning
        self.text = ""
        self.fragments = 0

    async def stream(self, fragments: AsyncIterator[str]) -> AsyncIterator[StreamUpdate]:
        self.text = ""
        self.fragments = 0
        total = ""
        try:
            async for fragment in fragments:
                self.fragments += 1
                fragment = fragment or ""
                if self.reasoning is None:
                    total += fragment
                    yield StreamUpdate(text=total)
                    continue
                visible, thinking = self.reasoning.feed(fragment)
                total += visible
                yield StreamUpdate(text=total, thinking=thinking)
        except TransportError:
            logger.warning("stream failed after %d fragments", self.fragments)
            raise
        except Exception as e:
            logger.warning("stream failed after %d fragments: %s", self.fragments, e)
            raise TransportError(str(e) or e.__class__.__name__, ErrorCategory.UNKNOWN) from e
        finally:
            aclose = getattr(fragments, "aclose", None)
            if aclose is not None:
                await aclose()

        if self.reasoning is not None:
            tail = self.reasoning.flush()
            if tail:
                total += tail
                yield StreamUpdate(text=total)
        self.text = total
