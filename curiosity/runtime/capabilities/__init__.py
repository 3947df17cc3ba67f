from .model import Capability, CapabilityExecutor, CapabilityKind, action, query
from .registry import CapabilityRegistry

__all__ = ["Capability", "CapabilityExecutor", "CapabilityKind", "CapabilityRegistry", "action", "query"]
