from __future__ import annotations
import math

# ===== Canvas / grid =====
CANVAS_W = 5000.0
CANVAS_H = 5000.0
CELL = 40

# ===== Camera =====
MIN_ZOOM = 0.3
MAX_ZOOM = 3.0
ZOOM_STEP = 0.1

# Footprint heuristic divisor, not the cell size
FOOTPRINT_DIV = 30.0

# ===== Default viewport (before the first resize) =====
VIEWPORT_W = 1100.0
VIEWPORT_H = 750.0

def snap(v: float, step: float = CELL) -> int:
    """Cell origin containing v (floor, so negatives land in the cell below 0)."""
    return int(math.floor(v / step) * step)

def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))

def in_canvas(x: float, y: float, cell: float = CELL) -> bool:
    return 0 <= x <= CANVAS_W - cell and 0 <= y <= CANVAS_H - cell
