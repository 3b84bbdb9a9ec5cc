import pytest

from config import settings
from services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    StorageError,
    get_storage,
    reset_storage,
)


@pytest.fixture(params=["memory", "json"])
def storage(request, tmp_path):
    if request.param == "memory":
        return InMemoryStorage()
    return JsonFileStorage(tmp_path / "store")


def test_get_missing_returns_none(storage):
    assert storage.get("progress", "nope") is None


def test_set_get_delete(storage):
    storage.set("progress", "sim-1", {"score": 80})
    assert storage.get("progress", "sim-1") == {"score": 80}
    storage.delete("progress", "sim-1")
    assert storage.get("progress", "sim-1") is None


def test_namespaces_are_isolated(storage):
    storage.set("progress", "k", 1)
    storage.set("history", "k", 2)
    assert storage.get("progress", "k") == 1
    assert storage.get("history", "k") == 2
    assert storage.keys("progress") == ["k"]


def test_delete_missing_is_noop(storage):
    storage.delete("progress", "nope")
    assert storage.keys("progress") == []


def test_json_storage_persists_across_instances(tmp_path):
    JsonFileStorage(tmp_path).set("progress", "sim-1", {"score": 55})
    assert JsonFileStorage(tmp_path).get("progress", "sim-1") == {"score": 55}


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_json_storage_rejects_corrupt_file(tmp_path, content):
    store = JsonFileStorage(tmp_path)
    (tmp_path / "progress.json").write_text(content, encoding="utf-8")
    with pytest.raises(StorageError, match="progress"):
        store.get("progress", "sim-1")
    with pytest.raises(StorageError):
        store.keys("progress")


def test_get_storage_selects_backend(monkeypatch, tmp_path):
    assert isinstance(get_storage(), InMemoryStorage)
    assert get_storage() is get_storage()

    reset_storage()
    monkeypatch.setattr(settings, "storage_backend", "json")
    monkeypatch.setattr(settings, "storage_path", str(tmp_path / "data"))
    assert isinstance(get_storage(), JsonFileStorage)


def test_get_storage_unknown_backend(monkeypatch):
    monkeypatch.setattr(settings, "storage_backend", "redis")
    with pytest.raises(ValueError, match="Unknown storage backend"):
        get_storage()
