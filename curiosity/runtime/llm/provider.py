from __future__ import annotations

from enum import Enum
from typing import AsyncIterator, Dict, List, Protocol


class ErrorCategory(str, Enum):
    TIMEOUT = "timeout"
    CONNECTION = "connection"
    BACKEND = "backend"
    UNKNOWN = "unknown"


class TransportError(Exception):
    """The generation backend failed before its turn ended."""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN):
        super().__init__(message)
        self.message = message
        self.category = category

    def __str__(self) -> str:
        return f"{self.category.value}: {self.message}"


class GenerationProvider(Protocol):
    def stream_chat(self, *, messages: List[Dict[str, str]]) -> AsyncIterator[str]:
        ...
