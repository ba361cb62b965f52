from __future__ import annotations
import random
import pytest

from construmator import MaterialType, ValidationError
from construmator.estimator import (RoomDimensions, estimate_blueprint, estimate_manual,
                                    finalize_build, unit_cost)


def test_unit_costs():
    assert unit_cost(MaterialType.BLOCK) == 14
    assert unit_cost("door") == 8000
    assert unit_cost("unobtainium") == 0


def test_finalize_adds_labour():
    summary = finalize_build({MaterialType.BLOCK: 10}, 1000)
    assert summary.counts == {"block": 10}
    assert summary.materials_cost == 140
    assert summary.labor_cost == pytest.approx(56)
    assert summary.total_cost == pytest.approx(196)
    assert summary.remaining == pytest.approx(804)


def test_finalize_can_go_over_budget():
    summary = finalize_build({MaterialType.DOOR: 1}, 1000)
    assert summary.remaining < 0


def test_finalize_validation():
    with pytest.raises(ValidationError):
        finalize_build({MaterialType.BLOCK: 1}, 0)
    with pytest.raises(ValidationError):
        finalize_build({}, 1000)


def test_manual_estimate_blocks():
    # 10 ft cube, no openings: 37.16 m2 of wall
    est = estimate_manual("bungalow", RoomDimensions(10, 10, 10), 100_000)
    assert est.blocks == 465
    assert est.flooring == pytest.approx(9.29)
    assert est.roofing == pytest.approx(11.15, abs=0.01)
    assert est.total_cost == pytest.approx(est.materials_cost * 1.4)
    assert est.remaining == pytest.approx(100_000 - est.total_cost)


def test_openings_and_house_type_change_quantities():
    plain = estimate_manual("bungalow", RoomDimensions(20, 15, 9), 500_000)
    holed = estimate_manual("bungalow", RoomDimensions(20, 15, 9, 3, 7, 4, 4), 500_000)
    bigger = estimate_manual("two-story", RoomDimensions(20, 15, 9), 500_000)
    assert holed.blocks < plain.blocks
    assert bigger.blocks > plain.blocks


def test_manual_estimate_validation():
    with pytest.raises(ValidationError):
        estimate_manual("", RoomDimensions(10, 10, 10), 100_000)
    with pytest.raises(ValidationError):
        estimate_manual("duplex", RoomDimensions(10, 0, 10), 100_000)
    with pytest.raises(ValidationError):
        estimate_manual("duplex", RoomDimensions(10, 10, 10), 999)


def test_blueprint_estimate_is_seedable():
    a = estimate_blueprint(300_000, random.Random(7))
    b = estimate_blueprint(300_000, random.Random(7))
    assert a == b
    assert a.blocks > 0 and a.flooring == 0
    with pytest.raises(ValidationError):
        estimate_blueprint(None)
