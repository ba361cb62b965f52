from __future__ import annotations
import json
import pytest

from construmator import ProjectStore, StorageError
from construmator.store import JsonListFile


def test_missing_file_reads_empty(tmp_path):
    assert JsonListFile(tmp_path / "nope.json").read() == []


def test_write_then_read(tmp_path):
    f = JsonListFile(tmp_path / "sub" / "data.json")
    f.write([{"a": 1, "name": "Bahay ni Juan"}])
    assert f.read() == [{"a": 1, "name": "Bahay ni Juan"}]
    assert not (tmp_path / "sub" / "data.json.tmp").exists()


def test_corrupt_file_raises(tmp_path):
    p = tmp_path / "data.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        JsonListFile(p).read()


def test_non_list_file_raises(tmp_path):
    p = tmp_path / "data.json"
    p.write_text(json.dumps({"id": 1}), encoding="utf-8")
    with pytest.raises(StorageError):
        JsonListFile(p).read()


def test_store_crud(store):
    store.append({"id": "a", "v": 1})
    store.append({"id": "b", "v": 1})
    assert store.get("a") == {"id": "a", "v": 1}
    assert store.update({"id": "a", "v": 2}) is True
    assert store.update({"id": "zz", "v": 2}) is False
    assert [r["id"] for r in store.all()] == ["a", "b"]
    assert store.get("a")["v"] == 2
    assert store.delete("a") is True
    assert store.delete("a") is False
    assert store.get("a") is None


def test_non_object_entries_raise(tmp_path):
    p = tmp_path / "data.json"
    p.write_text(json.dumps([{"id": "a"}, 1, 2]), encoding="utf-8")
    with pytest.raises(StorageError):
        JsonListFile(p).read()
    with pytest.raises(StorageError):
        ProjectStore(p).get("a")
