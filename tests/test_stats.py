from __future__ import annotations

from construmator import BuildStats, Floor, MaterialType, PlacedBlock, compute_stats
from construmator.stats import footprint, format_counts, format_size, total_cost


def test_empty_build():
    stats = compute_stats([], {})
    assert stats == BuildStats(0, (0, 0), 0, {})
    assert format_counts(stats.counts) == "No materials placed"
    assert format_size(stats) == "Size: 0×0 | Blocks: 0"


def test_footprint_uses_max_coordinates():
    blocks = [PlacedBlock(1, MaterialType.BLOCK, 80, 40, Floor.FIRST),
              PlacedBlock(2, MaterialType.BLOCK, 0, 0, Floor.SECOND)]
    # 80 / 30 + 1 -> 3.67, 40 / 30 + 1 -> 2.33
    assert footprint(blocks) == (4, 2)


def test_cost_sums_unit_prices():
    counts = {MaterialType.BLOCK: 3, MaterialType.STEEL: 1, MaterialType.DOOR: 1}
    assert total_cost(counts) == 3 * 14 + 300 + 8000


def test_counts_are_listed_in_insertion_order():
    counts = {MaterialType.STEEL: 2, MaterialType.BLOCK: 5}
    assert format_counts(counts) == "steel: 2, block: 5"


def test_stats_reflect_blocks_and_counts():
    blocks = [PlacedBlock(i, MaterialType.WOOD, i * 40, 0) for i in range(1, 4)]
    stats = compute_stats(blocks, {MaterialType.WOOD: 3})
    assert stats.total_blocks == 3
    assert stats.total_cost == 3 * 650
    assert format_size(stats) == f"Size: {stats.footprint[0]}×{stats.footprint[1]} | Blocks: 3"
