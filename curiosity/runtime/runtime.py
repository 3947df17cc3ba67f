from __future__ import annotations

import asyncio
import logging
import uuid
from enum import Enum
from typing import AsyncIterator, Optional

from curiosity import config
from curiosity.protocol import EventType, create_event
from curiosity.runtime.capabilities import Capability, CapabilityKind, CapabilityRegistry
from curiosity.runtime.history import ConversationHistory, Role
from curiosity.runtime.llm.provider import GenerationProvider, TransportError
from curiosity.runtime.prompts import build_system_prompt
from curiosity.runtime.streaming import ReasoningSeparator, StreamAggregator
from curiosity.runtime.tool_calls import (
    MalformedToolPayload,
    PlainText,
    extract_tool_call,
    format_tool_response,
)

logger = logging.getLogger("curiosity.runtime")

TRANSPORT_ERROR_TEXT = "An error occurred while fetching the response."
NO_BACKEND_TEXT = "No AI backend registered."
MALFORMED_TOOL_TEXT = "The assistant sent a malformed tool request."
MAX_ROUNDS_TEXT = "Reached max tool-calling rounds."
BUSY_TEXT = "Still working on the previous message."
THINKING_TEXT = "Thinking..."
EMPTY_REPLY_TEXT = "The assistant returned an empty reply."


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


class TurnState(str, Enum):
    IDLE = "idle"
    AWAITING = "awaiting"
    DISPATCHING = "dispatching"


class ConversationRuntime:
    """
    Drives one conversation: user turn -> streamed reply -> optional capability call.

    submit() is an async generator of display events (see curiosity.protocol). The
    runtime is not re-entrant: a submit() while a turn is in flight is rejected with
    a turn.rejected event and changes nothing.

    Query capabilities feed their result back as a tool turn and the backend is asked
    again, at most max_tool_rounds times per user turn.
    """

    def __init__(
        self,
        registry: Optional[CapabilityRegistry] = None,
        provider: Optional[GenerationProvider] = None,
        *,
        base_instructions: Optional[str] = None,
        max_tool_rounds: Optional[int] = None,
        strip_reasoning: Optional[bool] = None,
    ):
        self.registry = registry if registry is not None else CapabilityRegistry()
        self._provider = provider
        self.base_instructions = base_instructions
        self.max_tool_rounds = config.conversation_max_tool_rounds() if max_tool_rounds is None else max_tool_rounds
        self.strip_reasoning = config.llm_strip_reasoning() if strip_reasoning is None else strip_reasoning
        self._history = ConversationHistory()
        self._state = TurnState.IDLE
        self._task: Optional[asyncio.Task] = None

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state != TurnState.IDLE

    @property
    def history(self) -> ConversationHistory:
        return self._history

    @property
    def system_prompt(self) -> str:
        return build_system_prompt(self.registry.list(), base_instructions=self.base_instructions)

    def register_provider(self, provider: GenerationProvider) -> None:
        self._provider = provider

    def register_capability(self, capability: Capability) -> bool:
        return self.registry.register(capability)

    def reset(self) -> None:
        if self.busy:
            raise RuntimeError("Cannot reset while a turn is in flight")
        self._history.clear()

    def cancel(self) -> bool:
        """Cancel the task driving the in-flight turn. Returns False when idle."""
        task = self._task
        if task is None or task.done():
            return False
        logger.info("cancelling in-flight turn")
        task.cancel()
        return True

    async def submit(self, text: str) -> AsyncIterator[dict]:
        text = (text or "").strip()
        if not text:
            return

        turn_id = _new_id("turn")
        if self.busy:
            logger.warning("turn rejected: runtime is %s", self._state.value)
            yield create_event(EventType.TURN_REJECTED, {"turnId": turn_id, "text": BUSY_TEXT})
            return

        self._state = TurnState.AWAITING
        self._task = asyncio.current_task()
        try:
            yield create_event(EventType.USER_TURN, {"turnId": turn_id, "text": text})
            self._history.ensure_system_turn(lambda: self.system_prompt)
            self._history.append(Role.USER, text)

            if self._provider is None:
                logger.error("No AI backend has been registered. Use register_provider().")
                yield create_event(EventType.TRANSPORT_ERROR, {"turnId": turn_id, "text": NO_BACKEND_TEXT})
                return

            rounds = 0
            while True:
                aggregator = StreamAggregator(ReasoningSeparator() if self.strip_reasoning else None)
                thinking = False
                updates = aggregator.stream(self._provider.stream_chat(messages=self._history.to_messages()))
                try:
                    async for update in updates:
                        if update.thinking:
                            if not thinking:
                                thinking = True
                                yield create_event(EventType.STREAM_THINKING, {"turnId": turn_id, "text": THINKING_TEXT})
                            continue
                        thinking = False
                        yield create_event(EventType.STREAM_UPDATE, {"turnId": turn_id, "text": update.text})
                except TransportError as e:
                    logger.error("Streaming failed: %s", e)
                    yield create_event(EventType.TRANSPORT_ERROR, {"turnId": turn_id, "text": TRANSPORT_ERROR_TEXT})
                    return
                finally:
                    # Also closes the provider stream.
                    await updates.aclose()

                result = extract_tool_call(aggregator.text)
                if isinstance(result, PlainText):
                    if not result.text.strip():
                        logger.warning("backend returned an empty reply")
                        yield create_event(EventType.STREAM_DISCARDED, {"turnId": turn_id})
                        yield create_event(EventType.TRANSPORT_ERROR, {"turnId": turn_id, "text": EMPTY_REPLY_TEXT})
                        return
                    self._history.append(Role.ASSISTANT, result.text)
                    yield create_event(EventType.ASSISTANT_FINAL, {"turnId": turn_id, "text": result.text})
                    return

                # The raw envelope never stays on screen.
                yield create_event(EventType.STREAM_DISCARDED, {"turnId": turn_id})

                if isinstance(result, MalformedToolPayload):
                    logger.warning("malformed tool request (%s): %r", result.reason, result.payload)
                    yield create_event(EventType.TOOL_ERROR, {"turnId": turn_id, "text": MALFORMED_TOOL_TEXT})
                    return

                self._state = TurnState.DISPATCHING
                capability = self.registry.lookup(result.tool_name)
                if capability is None:
                    logger.warning("tool not found: %s", result.tool_name)
                    yield create_event(
                        EventType.CAPABILITY_NOT_FOUND,
                        {"turnId": turn_id, "toolName": result.tool_name, "text": f'Tool "{result.tool_name}" not found.'},
                    )
                    return

                response = None
                try:
                    outcome = await capability.execute(result.args)
                    if capability.kind == CapabilityKind.QUERY:
                        response = format_tool_response(outcome)
                except Exception:
                    logger.exception("Tool execution failed for %s.", capability.name)
                    yield create_event(
                        EventType.TOOL_ERROR,
                        {"turnId": turn_id, "toolName": capability.name, "text": f'Error executing tool "{capability.name}".'},
                    )
                    return

                yield create_event(
                    EventType.TOOL_USAGE,
                    {"turnId": turn_id, "toolName": capability.name, "text": f"Using tool: {capability.name}..."},
                )
                if response is None:
                    return

                if rounds >= self.max_tool_rounds:
                    logger.warning("max tool rounds (%d) reached, dropping result of %s", self.max_tool_rounds, capability.name)
                    yield create_event(
                        EventType.TOOL_ERROR,
                        {"turnId": turn_id, "toolName": capability.name, "text": MAX_ROUNDS_TEXT},
                    )
                    return
                rounds += 1
                self._history.append(Role.TOOL, response)
                self._state = TurnState.AWAITING
        except asyncio.CancelledError:
            logger.info("turn cancelled: %s", turn_id)
            raise
        finally:
            self._state = TurnState.IDLE
            self._task = None
