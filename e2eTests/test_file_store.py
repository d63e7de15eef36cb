import json

import pytest

from cihub.core.history_cache import HistoryCache
from cihub.domain.errors import PersistenceError
from cihub.infra.file_store import FileKeyValueStore
from fakes import make_entry


def test_missing_key_reads_none(tmp_path):
    assert FileKeyValueStore(tmp_path / "nested").get("cihub_history_v1") is None


def test_set_then_get(tmp_path):
    store = FileKeyValueStore(tmp_path / "nested")
    store.set("k", "[1]")
    store.set("k", "[2]")

    assert store.get("k") == "[2]"
    assert sorted(p.name for p in (tmp_path / "nested").iterdir()) == ["k.json"]


def test_write_into_unwritable_location_raises(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")

    with pytest.raises(PersistenceError):
        FileKeyValueStore(blocker).set("k", "v")


def test_history_persists_across_store_instances(tmp_path):
    cache = HistoryCache(FileKeyValueStore(tmp_path))
    cache.append(make_entry(1_000))
    cache.append(make_entry(2_000))

    reloaded = HistoryCache(FileKeyValueStore(tmp_path))
    reloaded.load()

    assert reloaded.restore_all() == cache.restore_all()
    stored = json.loads((tmp_path / "cihub_history_v1.json").read_text())
    assert [item["ts"] for item in stored] == [2_000, 1_000]


def test_unwritable_history_does_not_raise(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    cache = HistoryCache(FileKeyValueStore(blocker))

    cache.append(make_entry(1_000))

    assert len(cache) == 1
