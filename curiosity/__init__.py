from curiosity.runtime.capabilities import Capability, CapabilityKind, CapabilityRegistry, action, query
from curiosity.runtime.history import ConversationHistory, Role, Turn
from curiosity.runtime.llm import GenerationProvider, OpenAIChatCompletionsProvider, TransportError
from curiosity.runtime.runtime import ConversationRuntime, TurnState

__version__ = "0.2.0"

__all__ = [
    "Capability",
    "CapabilityKind",
    "CapabilityRegistry",
    "ConversationHistory",
    "ConversationRuntime",
    "GenerationProvider",
    "OpenAIChatCompletionsProvider",
    "Role",
    "TransportError",
    "Turn",
    "TurnState",
    "action",
    "query",
]
