# Storage Package
from storage.store import DurableStore
from storage.file_store import FileDurableStore
from storage.memory_store import InMemoryDurableStore

__all__ = ["DurableStore", "FileDurableStore", "InMemoryDurableStore"]
