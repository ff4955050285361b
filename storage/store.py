"""
Durable Store Interface

Scoped key-value persistence for serialized engine state.
Storage-agnostic - implementations can write to files, memory, a browser
bridge, etc.

DESIGN RULES:
- One opaque string per key, no partial updates
- Implementations may raise; callers decide how to absorb failures
"""

from abc import ABC, abstractmethod
from typing import Optional


class DurableStore(ABC):
    """
    Abstract base for durable key-value storage.

    Implementations:
    - FileDurableStore (JSON file per key, local)
    - InMemoryDurableStore (process memory, tests)
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage slot name

        Returns:
            The serialized value, or None when the slot is empty
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Replace the value stored under a key.

        Args:
            key: Storage slot name
            value: Serialized value
        """
        pass
