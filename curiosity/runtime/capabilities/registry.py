from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from curiosity.runtime.capabilities.model import Capability

logger = logging.getLogger("curiosity.capabilities")


class CapabilityRegistry:
    """
    Name-indexed capabilities, kept in registration order.

    The order matters: it is the order of the usage descriptors in the system prompt.
    """

    def __init__(self, capabilities: Iterable[Capability] = ()):
        self._capabilities: Dict[str, Capability] = {}
        for c in capabilities:
            self.register(c)

    def register(self, capability: Capability) -> bool:
        if capability.name in self._capabilities:
            logger.warning('A tool with the name "%s" is already registered.', capability.name)
            return False
        self._capabilities[capability.name] = capability
        logger.debug("capability registered: %s (%s)", capability.name, capability.kind.value)
        return True

    def lookup(self, name: str) -> Optional[Capability]:
        return self._capabilities.get(name)

    def list(self) -> List[Capability]:
        return list(self._capabilities.values())

    def names(self) -> List[str]:
        return list(self._capabilities.keys())

    def __len__(self) -> int:
        return len(self._capabilities)

    def __contains__(self, name: object) -> bool:
        return name in self._capabilities
