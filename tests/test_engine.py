"""Grid placement: snapping, uniqueness per floor, bounds, deletion and modes."""
from __future__ import annotations
import pytest

from construmator import (Floor, MaterialType, Mode, OccupiedCellError, OutOfBoundsError,
                          PlacementEngine, ValidationError)


@pytest.fixture
def engine():
    e = PlacementEngine()
    e.select_material("block")
    return e


def test_place_snaps_to_cell_origin(engine):
    block = engine.place(100, 100, 1)
    assert (block.x, block.y, block.floor) == (80, 80, Floor.FIRST)
    assert block.material is MaterialType.BLOCK
    assert engine.counts == {MaterialType.BLOCK: 1}


def test_same_cell_same_floor_is_rejected(engine):
    engine.place(100, 100, 1)
    with pytest.raises(OccupiedCellError) as exc:
        engine.place(85, 119, 1)
    assert (exc.value.x, exc.value.y, exc.value.floor) == (80, 80, 1)
    assert len(engine) == 1
    assert engine.counts == {MaterialType.BLOCK: 1}


def test_floors_do_not_share_cells(engine):
    engine.place(100, 100, 1)
    engine.place(100, 100, 2)
    assert len(engine) == 2
    assert engine.block_at(80, 80, 2).floor == Floor.SECOND


def test_out_of_bounds_is_rejected(engine):
    with pytest.raises(OutOfBoundsError):
        engine.place(-1, 10, 1)
    with pytest.raises(OutOfBoundsError):
        engine.place(5000, 10, 1)
    assert len(engine) == 0


def test_last_cell_is_inside(engine):
    block = engine.place(4999, 4999, 1)
    assert (block.x, block.y) == (4960, 4960)


def test_place_requires_selected_material():
    with pytest.raises(ValidationError):
        PlacementEngine().place(10, 10, 1)


def test_unknown_material_is_rejected():
    with pytest.raises(ValidationError):
        PlacementEngine().select_material("marble")


def test_concurrent_placement_is_dropped(engine):
    with engine._placing:
        assert engine.place(100, 100, 1) is None
    assert len(engine) == 0
    assert engine.place(100, 100, 1) is not None


def test_ids_are_unique_and_not_reused(engine):
    a = engine.place(0, 0, 1)
    engine.toggle_delete_mode()
    engine.delete(a.id, 1)
    engine.select_material("steel")
    b = engine.place(0, 0, 1)
    assert b.id != a.id


def test_delete_restores_counts_and_frees_cell(engine):
    a = engine.place(0, 0, 1)
    engine.place(40, 0, 1)
    engine.toggle_delete_mode()
    assert engine.delete(a.id, Floor.FIRST) is True
    assert engine.counts == {MaterialType.BLOCK: 1}
    assert engine.block_at(0, 0, 1) is None


def test_count_entry_disappears_at_zero(engine):
    a = engine.place(0, 0, 1)
    engine.toggle_delete_mode()
    engine.delete(a.id, 1)
    assert engine.counts == {}
    assert MaterialType.BLOCK not in engine.counts


def test_delete_ignores_other_floor_and_other_modes(engine):
    a = engine.place(0, 0, 1)
    assert engine.delete(a.id, 1) is False
    engine.toggle_delete_mode()
    assert engine.delete(a.id, 2) is False
    assert engine.delete(999, 1) is False
    assert len(engine) == 1


def test_delete_mode_toggle_drops_material(engine):
    assert engine.toggle_delete_mode() is True
    assert engine.mode is Mode.DELETE and engine.material is None
    assert engine.toggle_delete_mode() is False
    assert engine.mode is Mode.IDLE and engine.material is None


def test_selecting_material_leaves_delete_mode(engine):
    engine.toggle_delete_mode()
    engine.select_material(MaterialType.WINDOW)
    assert engine.mode is Mode.PLACEMENT
    assert not engine.delete_mode


def test_clear_empties_everything(engine):
    engine.place(0, 0, 1)
    engine.place(0, 0, 2)
    engine.clear()
    assert len(engine) == 0
    assert engine.counts == {}
    assert engine.place(0, 0, 1) is not None


def test_restore_rebuilds_indexes():
    e = PlacementEngine()
    e.restore([(MaterialType.BLOCK, 0, 0, Floor.FIRST), (MaterialType.DOOR, 0, 0, Floor.SECOND),
               (MaterialType.BLOCK, 40, 0, Floor.FIRST)])
    assert e.counts == {MaterialType.BLOCK: 2, MaterialType.DOOR: 1}
    assert e.block_at(0, 0, 2).material is MaterialType.DOOR


def test_restore_rejects_duplicate_cells():
    with pytest.raises(OccupiedCellError):
        PlacementEngine().restore([(MaterialType.BLOCK, 0, 0, Floor.FIRST),
                                   (MaterialType.STEEL, 0, 0, Floor.FIRST)])
