from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Tuple


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass(frozen=True)
class Turn:
    role: Role
    content: str

    def to_message(self) -> Dict[str, str]:
        return {"role": self.role.value, "content": self.content}


class ConversationHistory:
    """
    Append-only, chronological turns for one session.

    The system turn goes in at most once, right before the first user turn.
    """

    def __init__(self) -> None:
        self._turns: List[Turn] = []

    @property
    def turns(self) -> Tuple[Turn, ...]:
        return tuple(self._turns)

    @property
    def has_system_turn(self) -> bool:
        return any(t.role == Role.SYSTEM for t in self._turns)

    def append(self, role: Role, content: str) -> Turn:
        if role == Role.SYSTEM and self._turns:
            raise ValueError("system turn must come first and only once")
        turn = Turn(role=role, content=content)
        self._turns.append(turn)
        return turn

    def ensure_system_turn(self, build: Callable[[], str]) -> Optional[Turn]:
        if self._turns:
            return None
        return self.append(Role.SYSTEM, build())

    def to_messages(self) -> List[Dict[str, str]]:
        return [t.to_message() for t in self._turns]

    def clear(self) -> None:
        self._turns = []

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(list(self._turns))

    def __getitem__(self, index: int) -> Turn:
        return self._turns[index]
