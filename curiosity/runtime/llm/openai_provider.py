from __future__ import annotations

from typing import Any, AsyncIterator, Dict, List, Optional

from curiosity import config
from curiosity.runtime.llm.provider import ErrorCategory, TransportError


def categorize_exception(exc: BaseException) -> TransportError:
    name = exc.__class__.__name__
    if "Timeout" in name:
        return TransportError(str(exc) or name, ErrorCategory.TIMEOUT)
    if "Connection" in name or "Connect" in name or "Network" in name:
        return TransportError(str(exc) or name, ErrorCategory.CONNECTION)
    return TransportError(str(exc) or name, ErrorCategory.BACKEND)


class OpenAIChatCompletionsProvider:
    """
    Streaming chat provider for OpenAI's Chat Completions API and compatible servers
    (LM Studio, vLLM, llama.cpp server, ...).

    Yields plain text deltas; tool calls travel inside that text, so the native
    tools parameter is never sent.
    """

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ):
        self.base_url = base_url if base_url is not None else config.llm_base_url()
        self.model = model or config.llm_model_name()
        self.temperature = config.llm_temperature() if temperature is None else temperature
        self.tool_role = config.llm_tool_role()
        self.api_key = api_key or config.llm_api_key()

        if not self.api_key:
            if self.base_url is None:
                raise RuntimeError("OPENAI_API_KEY is not set")
            # Local OpenAI-compatible servers accept any key.
            self.api_key = "not-needed"

        # Import lazily so the runtime imports without the SDK installed.
        from openai import AsyncOpenAI  # type: ignore

        self._client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url)

    def _outgoing(self, messages: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        # A bare "tool" message without tool_call_id is rejected by most endpoints.
        if self.tool_role == "tool":
            return list(messages)
        return [{**m, "role": self.tool_role} if m.get("role") == "tool" else m for m in messages]

    async def stream_chat(self, *, messages: List[Dict[str, Any]]) -> AsyncIterator[str]:
        try:
            stream = await self._client.chat.completions.create(
                model=self.model,
                messages=self._outgoing(messages),
                stream=True,
                temperature=self.temperature,
            )
            async for chunk in stream:
                if not getattr(chunk, "choices", None):
                    continue
                delta = chunk.choices[0].delta
                content = getattr(delta, "content", None)
                if content:
                    yield content
        except TransportError:
            raise
        except Exception as e:
            raise categorize_exception(e) from e
