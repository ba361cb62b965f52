"""Fixed-formula cost calculators.

All quantities follow common Philippine rules of thumb: 12.5 CHB per m2 of
wall, 0.522 bags of cement and 0.0435 m3 of sand of mortar per m2, Class A
concrete at 9 bags per m3 on a 15 cm foundation, and 3.75 m of rebar per m2
of wall cut from 6 m bars. Labour is charged at 40 % of materials.
"""
from __future__ import annotations
import math
import random
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from .errors import ValidationError

FT_TO_M = 0.3048
LABOR_RATE = 0.4
MIN_BUDGET = 1000.0

# PHP per unit
UNIT_COSTS: Dict[str, float] = {
    "block": 14, "steel": 300, "roof": 180,
    "tile": 300, "wood": 650, "door": 8000, "window": 5000,
    "cement": 240, "sand": 2400, "gravel": 3500,
    "plywood": 1140, "metal_sheet": 312, "ceramic_tile": 250, "tile_adhesive": 400,
}
GYPSUM_BOARD_COST = 180

HOUSE_MULTIPLIERS = {"two-story": 1.8, "duplex": 1.5, "customized": 1.3}

BLOCKS_PER_M2 = 12.5
MORTAR_CEMENT_PER_M2 = 0.522
MORTAR_SAND_PER_M2 = 0.0435
FOUNDATION_DEPTH = 0.15
CONCRETE_CEMENT_PER_M3 = 9
CONCRETE_SAND_PER_M3 = 0.5
STEEL_PER_M2 = 1.6 + 2.15
BAR_LENGTH = 6
ROOF_SLOPE = 1.2


def unit_cost(material) -> float:
    return UNIT_COSTS.get(getattr(material, "value", material), 0)


@dataclass
class RoomDimensions:
    """Room size in feet; openings default to none."""
    length: float
    width: float
    height: float
    door_width: float = 0.0
    door_height: float = 0.0
    window_width: float = 0.0
    window_height: float = 0.0


@dataclass
class Estimate:
    blocks: int = 0
    cement: int = 0
    steel: int = 0
    sand: float = 0.0
    flooring: float = 0.0
    ceiling: float = 0.0
    roofing: float = 0.0
    materials_cost: float = 0.0
    labor_cost: float = 0.0
    total_cost: float = 0.0
    budget: float = 0.0

    @property
    def remaining(self) -> float:
        return self.budget - self.total_cost

    @property
    def materials_used(self) -> str:
        return (f"Blocks: {self.blocks}, Cement: {self.cement}, Steel: {self.steel}, "
                f"Sand: {self.sand}m³, Flooring: {self.flooring}m², "
                f"Ceiling: {self.ceiling}m², Roofing: {self.roofing}m²")


@dataclass
class BuildSummary:
    counts: Dict[str, int] = field(default_factory=dict)
    materials_cost: float = 0.0
    labor_cost: float = 0.0
    total_cost: float = 0.0
    budget: float = 0.0

    @property
    def remaining(self) -> float:
        return self.budget - self.total_cost


def _wall_quantities(net_wall: float, floor_area: float, m: float = 1.0) -> Dict[str, float]:
    volume = floor_area * FOUNDATION_DEPTH * m
    cement = math.ceil(net_wall * MORTAR_CEMENT_PER_M2 * m) + math.ceil(volume * CONCRETE_CEMENT_PER_M3)
    sand = round(net_wall * MORTAR_SAND_PER_M2 * m, 2) + round(volume * CONCRETE_SAND_PER_M3, 2)
    return {
        "blocks": math.ceil(net_wall * BLOCKS_PER_M2 * m),
        "cement": cement,
        "sand": round(sand, 2),
        "steel": math.ceil(net_wall * STEEL_PER_M2 * m / BAR_LENGTH),
    }


def _core_cost(q: Mapping[str, float]) -> float:
    return (q["blocks"] * UNIT_COSTS["block"] + q["cement"] * UNIT_COSTS["cement"] +
            q["steel"] * UNIT_COSTS["steel"] + q["sand"] * UNIT_COSTS["sand"])


def estimate_manual(house_type: str, dims: Optional[RoomDimensions], budget: Optional[float]) -> Estimate:
    if not house_type:
        raise ValidationError("Please select a house type first")
    if dims is None or not (dims.length and dims.width and dims.height):
        raise ValidationError("Please fill in all room dimensions")
    if not budget or budget < MIN_BUDGET:
        raise ValidationError(f"Please enter a valid budget (minimum ₱{MIN_BUDGET:,.0f})")

    length, width, height = dims.length * FT_TO_M, dims.width * FT_TO_M, dims.height * FT_TO_M
    floor_area = length * width
    wall_area = 2 * (length + width) * height
    door = (dims.door_width * FT_TO_M) * (dims.door_height * FT_TO_M)
    window = (dims.window_width * FT_TO_M) * (dims.window_height * FT_TO_M)
    net_wall = wall_area - door - window
    m = HOUSE_MULTIPLIERS.get(house_type, 1.0)

    q = _wall_quantities(net_wall, floor_area, m)
    flooring = round(floor_area * m, 2)
    ceiling = round(floor_area * m, 2)
    roofing = round(floor_area * m * ROOF_SLOPE, 2)
    materials = (_core_cost(q) + flooring * UNIT_COSTS["ceramic_tile"] +
                 ceiling * GYPSUM_BOARD_COST + roofing * UNIT_COSTS["metal_sheet"])
    labor = materials * LABOR_RATE
    return Estimate(blocks=q["blocks"], cement=q["cement"], steel=q["steel"], sand=q["sand"],
                    flooring=flooring, ceiling=ceiling, roofing=roofing,
                    materials_cost=materials, labor_cost=labor, total_cost=materials + labor,
                    budget=float(budget))


def estimate_blueprint(budget: Optional[float], rng: Optional[random.Random] = None) -> Estimate:
    """Rough estimate from simulated blueprint dimensions (metres), 10 % of wall left for openings."""
    if not budget:
        raise ValidationError("Please enter your budget first")
    rng = rng or random.Random()
    length = 12 + rng.random() * 8
    width = 8 + rng.random() * 6
    height = 2.5 + rng.random() * 1
    floor_area = length * width
    net_wall = 2 * (length + width) * height * 0.9

    q = _wall_quantities(net_wall, floor_area)
    materials = _core_cost(q)
    labor = materials * LABOR_RATE
    return Estimate(blocks=q["blocks"], cement=q["cement"], steel=q["steel"], sand=q["sand"],
                    materials_cost=materials, labor_cost=labor, total_cost=materials + labor,
                    budget=float(budget))


def finalize_build(counts: Mapping, budget: Optional[float]) -> BuildSummary:
    if not budget:
        raise ValidationError("Please enter your budget first")
    if not counts:
        raise ValidationError("Please place some materials first")
    plain = {getattr(k, "value", k): int(v) for k, v in counts.items()}
    materials = sum(unit_cost(k) * v for k, v in plain.items())
    labor = materials * LABOR_RATE
    return BuildSummary(counts=plain, materials_cost=materials, labor_cost=labor,
                        total_cost=materials + labor, budget=float(budget))
