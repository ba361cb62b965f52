"""Saving and loading named projects for the logged-in user."""
from __future__ import annotations
import pytest

from construmator import (EditorSession, EmptyProjectError, Floor, MaterialType, NotAuthenticatedError,
                          NotFoundError, OccupiedCellError, StorageError, ValidationError)


def _build(session):
    session.select_material("block")
    session.click(10, 10)
    session.click(50, 10)
    session.select_material("door")
    session.switch_floor(2)
    session.click(10, 10)
    session.set_budget(250_000)
    return session


def _snapshot(session):
    return sorted((b.material.value, b.x, b.y, int(b.floor)) for b in session.engine.blocks)


def test_save_writes_record(persistence, store, alice, session):
    project = persistence.save(_build(session), "My House")
    rec = store.get(project.id)
    assert rec["userId"] == alice.id
    assert rec["projectName"] == "My House"
    assert rec["version"] == "1.0"
    assert rec["currentFloor"] == 2
    assert rec["budget"] == 250_000
    assert rec["materials"] == {"block": 2, "door": 1}
    assert {"type": "door", "x": 0, "y": 0, "z": 1, "floor": 2} in rec["building"]
    assert rec["savedAt"]


def test_load_restores_session(persistence, alice, session):
    project = persistence.save(_build(session), "My House")
    fresh = EditorSession()
    persistence.load(fresh, project.id)
    assert _snapshot(fresh) == _snapshot(session)
    assert fresh.engine.counts == {MaterialType.BLOCK: 2, MaterialType.DOOR: 1}
    assert fresh.floors.current == Floor.SECOND
    assert fresh.budget == 250_000


def test_load_twice_gives_same_state(persistence, alice, session):
    project = persistence.save(_build(session), "My House")
    fresh = EditorSession()
    persistence.load(fresh, project.id)
    first = _snapshot(fresh)
    persistence.load(fresh, project.id)
    assert _snapshot(fresh) == first
    assert len(fresh.engine) == 3


def test_loaded_blocks_keep_uniqueness(persistence, alice, session):
    project = persistence.save(_build(session), "My House")
    fresh = EditorSession()
    persistence.load(fresh, project.id)
    fresh.select_material("steel")
    with pytest.raises(OccupiedCellError):
        fresh.click(10, 10)


def test_same_name_overwrites(persistence, store, alice, session):
    first = persistence.save(_build(session), "My House")
    session.switch_floor(1)
    session.select_material("block")
    session.click(90, 10)
    second = persistence.save(session, "My House")
    assert second.id == first.id
    assert len(store.all()) == 1
    assert store.get(first.id)["materials"]["block"] == 3


def test_names_are_per_user(persistence, store, auth, alice, session):
    persistence.save(_build(session), "My House")
    auth.register("bob@example.com", "secret2", "Bob")
    auth.login("bob@example.com", "secret2")
    persistence.save(session, "My House")
    assert len(store.all()) == 2
    assert [p.project_name for p in persistence.list_projects()] == ["My House"]


def test_save_requires_login(persistence, session):
    with pytest.raises(NotAuthenticatedError):
        persistence.save(_build(session), "My House")


def test_save_requires_name_and_blocks(persistence, alice, session):
    with pytest.raises(EmptyProjectError):
        persistence.save(session, "Empty")
    with pytest.raises(ValidationError):
        persistence.save(_build(session), "   ")


def test_session_expiry_blocks_save(persistence, clock, alice, session):
    clock.advance(25)
    with pytest.raises(NotAuthenticatedError):
        persistence.save(_build(session), "Late")


def test_list_is_empty_when_logged_out(persistence, auth, alice, session):
    persistence.save(_build(session), "My House")
    assert len(persistence.list_projects()) == 1
    auth.logout()
    assert persistence.list_projects() == []


def test_load_unknown_or_foreign_project(persistence, auth, alice, session):
    project = persistence.save(_build(session), "My House")
    with pytest.raises(NotFoundError):
        persistence.load(EditorSession(), "missing")
    auth.register("bob@example.com", "secret2", "Bob")
    auth.login("bob@example.com", "secret2")
    with pytest.raises(NotFoundError):
        persistence.load(EditorSession(), project.id)


@pytest.mark.parametrize("bad_block", [
    {"type": "marble", "x": 0, "y": 0, "floor": 1},
    {"type": "block", "x": 0, "y": 0, "floor": 3},
    {"type": "block", "x": 13, "y": 0, "floor": 1},
    {"type": "block", "x": 5000, "y": 0, "floor": 1},
    {"type": "block", "y": 0, "floor": 1},
    {"type": "block", "x": 40.9, "y": 0, "floor": 1},
    {"type": "block", "x": "40", "y": 0, "floor": 1},
    {"type": "block", "x": 40, "y": 0, "floor": 0},
    {"type": "block", "x": 40, "y": 0, "floor": 1.5},
    {"type": "block", "x": 40, "y": 0, "floor": None},
])
def test_corrupt_project_leaves_session_untouched(persistence, store, alice, session, bad_block):
    store.append({"id": "bad", "userId": alice.id, "projectName": "Broken",
                  "savedAt": "2026-01-01T00:00:00+00:00", "budget": 10, "currentFloor": 1,
                  "materials": {}, "building": [{"type": "block", "x": 0, "y": 0, "floor": 1}, bad_block]})
    _build(session)
    before = _snapshot(session)
    with pytest.raises(StorageError):
        persistence.load(session, "bad")
    assert _snapshot(session) == before
    assert session.budget == 250_000


def test_duplicate_cells_in_record_are_corrupt(persistence, store, alice, session):
    block = {"type": "block", "x": 40, "y": 40, "floor": 1}
    store.append({"id": "dup", "userId": alice.id, "projectName": "Dup",
                  "savedAt": "", "building": [block, dict(block)]})
    with pytest.raises(StorageError):
        persistence.load(session, "dup")
    assert len(session.engine) == 0


def test_delete_own_project(persistence, store, alice, session):
    project = persistence.save(_build(session), "My House")
    assert persistence.delete(project.id) is True
    assert persistence.delete(project.id) is False
    assert store.all() == []


def test_missing_floor_defaults_to_first(persistence, store, alice, session):
    store.append({"id": "old", "userId": alice.id, "projectName": "Old", "savedAt": "",
                  "building": [{"type": "block", "x": 40, "y": 0}]})
    persistence.load(session, "old")
    assert session.engine.block_at(40, 0, 1) is not None
    assert session.floors.current == Floor.FIRST


def test_stored_current_floor_zero_is_corrupt(persistence, store, alice, session):
    store.append({"id": "f0", "userId": alice.id, "projectName": "F0", "savedAt": "",
                  "currentFloor": 0, "building": [{"type": "block", "x": 0, "y": 0, "floor": 1}]})
    with pytest.raises(StorageError):
        persistence.load(session, "f0")
    assert len(session.engine) == 0


def test_malformed_record_fields_raise_storage_error(persistence, store, alice, session):
    store.append({"id": "p1", "userId": alice.id, "projectName": "Bad budget", "savedAt": "",
                  "budget": "abc", "building": []})
    with pytest.raises(StorageError):
        persistence.list_projects()
    with pytest.raises(StorageError):
        persistence.load(session, "p1")


def test_non_object_store_entries_raise_storage_error(persistence, store, alice, session):
    store.file.write([1, 2])
    with pytest.raises(StorageError):
        persistence.list_projects()
    with pytest.raises(StorageError):
        persistence.load(session, "p1")
    with pytest.raises(StorageError):
        persistence.save(_build(session), "My House")
