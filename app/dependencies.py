"""
FastAPI Dependencies

All object creation happens here, not per request.
The session manager is built once per application instance, owned by the
app lifespan and injected into routes.

RULE: Routes never build engine objects and never reach for globals.
"""

from fastapi import Request

from app.core.config import Settings, settings
from session.manager import SessionManager
from session.persistence import DebouncedPersistence
from storage.file_store import FileDurableStore
from storage.memory_store import InMemoryDurableStore
from storage.store import DurableStore


def build_store(config: Settings = settings) -> DurableStore:
    """Create the configured durable store."""
    if config.storage_backend == "memory":
        return InMemoryDurableStore()
    return FileDurableStore(config.storage_dir)


def build_session_manager(config: Settings = settings) -> SessionManager:
    """
    Wire a SessionManager from settings.
    
    - Durable store: file (default) or memory
    - Persistence: immediate (default) or debounced
    
    Returns:
        SessionManager: Not yet initialized; the caller owns init/teardown.
    """
    persistence = None
    if config.persist_mode == "debounced":
        window = config.debounce_seconds
        persistence = lambda write: DebouncedPersistence(write, window_seconds=window)
    
    return SessionManager(
        store=build_store(config),
        key=config.storage_key,
        persistence=persistence,
    )


def get_session_manager(request: Request) -> SessionManager:
    """Return the session manager owned by the running application."""
    return request.app.state.session_manager
