# Session Package
from session.manager import SessionManager, SessionState
from session.persistence import PersistenceStrategy, ImmediatePersistence, DebouncedPersistence
from session.codec import serialize, hydrate, CorruptRecordError

__all__ = [
    "SessionManager",
    "SessionState",
    "PersistenceStrategy",
    "ImmediatePersistence",
    "DebouncedPersistence",
    "serialize",
    "hydrate",
    "CorruptRecordError",
]
