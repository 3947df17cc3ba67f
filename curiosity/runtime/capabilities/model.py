from __future__ import annotations

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional


CapabilityExecutor = Callable[[Dict[str, Any]], Any]


class CapabilityKind(str, Enum):
    ACTION = "action"
    QUERY = "query"


@dataclass(frozen=True)
class Capability:
    """
    A named unit of functionality the backend can ask for.

    kind decides what happens to the result:
      action: fire-and-forget, the result is dropped
      query: the result is fed back into the conversation
    arguments maps argument names to short descriptions; they are shown to the
    backend as the placeholder values of the usage example.
    """

    name: str
    description: str
    kind: CapabilityKind
    executor: CapabilityExecutor
    arguments: Optional[Dict[str, str]] = None

    async def execute(self, args: Dict[str, Any]) -> Any:
        result = self.executor(args)
        if inspect.isawaitable(result):
            result = await result
        if self.kind == CapabilityKind.ACTION:
            return None
        return result


def action(
    name: str,
    description: str,
    executor: CapabilityExecutor,
    arguments: Optional[Dict[str, str]] = None,
) -> Capability:
    return Capability(name=name, description=description, kind=CapabilityKind.ACTION, executor=executor, arguments=arguments)


def query(
    name: str,
    description: str,
    executor: CapabilityExecutor,
    arguments: Optional[Dict[str, str]] = None,
) -> Capability:
    return Capability(name=name, description=description, kind=CapabilityKind.QUERY, executor=executor, arguments=arguments)
