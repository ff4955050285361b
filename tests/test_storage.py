"""
Durable Store Tests
"""

from storage.file_store import FileDurableStore
from storage.memory_store import InMemoryDurableStore


def test_file_store_missing_key(tmp_path):
    store = FileDurableStore(directory=str(tmp_path))
    assert store.get("medisync_interactions") is None


def test_file_store_roundtrip_and_overwrite(tmp_path):
    store = FileDurableStore(directory=str(tmp_path))

    store.set("medisync_interactions", '{"sessionCount": 1}')
    store.set("medisync_interactions", '{"sessionCount": 2}')

    assert store.get("medisync_interactions") == '{"sessionCount": 2}'
    assert (tmp_path / "medisync_interactions.json").exists()


def test_file_store_leaves_no_temp_files(tmp_path):
    store = FileDurableStore(directory=str(tmp_path))
    for i in range(3):
        store.set("slot", str(i))

    assert list(tmp_path.glob("*.tmp")) == []
    assert list(tmp_path.glob(".*.tmp")) == []


def test_file_store_sanitizes_keys(tmp_path):
    store = FileDurableStore(directory=str(tmp_path))

    path = store.path_for("../users/42")

    assert path.parent == tmp_path
    assert path.name == ".._users_42.json"
    store.set("../users/42", "{}")
    assert store.get("../users/42") == "{}"


def test_file_store_creates_directory(tmp_path):
    target = tmp_path / "nested" / "state"
    FileDurableStore(directory=str(target))
    assert target.is_dir()


def test_memory_store():
    store = InMemoryDurableStore({"existing": "{}"})

    assert store.get("existing") == "{}"
    assert store.get("missing") is None

    store.set("key", "value")

    assert store.get("key") == "value"
    assert store.write_count == 1
