from .provider import ErrorCategory, GenerationProvider, TransportError
from .openai_provider import OpenAIChatCompletionsProvider

__all__ = ["ErrorCategory", "GenerationProvider", "TransportError", "OpenAIChatCompletionsProvider"]
