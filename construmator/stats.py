from __future__ import annotations
from typing import Iterable, Mapping

from .estimator import unit_cost
from .models import BuildStats, MaterialType, PlacedBlock
from .utils import FOOTPRINT_DIV


def footprint(blocks: Iterable[PlacedBlock]) -> tuple:
    blocks = list(blocks)
    if not blocks:
        return (0, 0)
    w = max(b.x for b in blocks) / FOOTPRINT_DIV + 1
    h = max(b.y for b in blocks) / FOOTPRINT_DIV + 1
    return (int(round(w)), int(round(h)))


def total_cost(counts: Mapping[MaterialType, int]) -> float:
    return sum(unit_cost(m) * n for m, n in counts.items())


def compute_stats(blocks: Iterable[PlacedBlock], counts: Mapping[MaterialType, int]) -> BuildStats:
    blocks = list(blocks)
    return BuildStats(total_blocks=len(blocks), footprint=footprint(blocks),
                      total_cost=total_cost(counts), counts=dict(counts))


def format_counts(counts: Mapping[MaterialType, int]) -> str:
    if not counts:
        return "No materials placed"
    return ", ".join(f"{getattr(m, 'value', m)}: {n}" for m, n in counts.items())


def format_size(stats: BuildStats) -> str:
    w, h = stats.footprint
    return f"Size: {w}×{h} | Blocks: {stats.total_blocks}"
