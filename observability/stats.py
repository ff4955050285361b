"""
Engine Stats

Counters describing how the engine's storage boundary behaves in practice.
Read-only for consumers; only the session manager increments them.

DESIGN RULES:
- Pure data container
- Observing never changes engine behavior
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass
class EngineStats:
    """
    Storage counters for one session manager.

    hydration_fallbacks counts sessions that started from defaults because
    the durable record was unreadable or corrupt (an empty store is not a
    fallback).
    """
    hydrations: int = 0
    hydration_fallbacks: int = 0
    writes: int = 0
    write_failures: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for logging/export."""
        return asdict(self)
