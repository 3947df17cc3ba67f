from .runtime import ConversationRuntime, TurnState

__all__ = ["ConversationRuntime", "TurnState"]
