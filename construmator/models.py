from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List, Tuple

from .errors import StorageError, ValidationError


class MaterialType(str, Enum):
    BLOCK = "block"
    STEEL = "steel"
    ROOF = "roof"
    TILE = "tile"
    WOOD = "wood"
    DOOR = "door"
    WINDOW = "window"
    PLYWOOD = "plywood"
    METAL_SHEET = "metal_sheet"
    CERAMIC_TILE = "ceramic_tile"
    TILE_ADHESIVE = "tile_adhesive"

    @classmethod
    def parse(cls, value) -> "MaterialType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            raise ValidationError(f"Unknown material: {value!r}") from None


class Floor(IntEnum):
    FIRST = 1
    SECOND = 2

    @classmethod
    def parse(cls, value) -> "Floor":
        try:
            if isinstance(value, float) and not value.is_integer():
                raise ValueError(value)
            return cls(int(value))
        except (TypeError, ValueError):
            raise ValidationError(f"Floor must be 1 or 2, got {value!r}") from None


class Mode(str, Enum):
    IDLE = "idle"
    PLACEMENT = "placement"
    DELETE = "delete"


@dataclass(frozen=True)
class PlacedBlock:
    id: int
    material: MaterialType
    x: int
    y: int
    floor: Floor = Floor.FIRST
    z: int = 1

    @property
    def cell(self) -> Tuple[int, int, int]:
        return (self.x, self.y, int(self.floor))


@dataclass
class BuildStats:
    total_blocks: int = 0
    footprint: Tuple[int, int] = (0, 0)
    total_cost: float = 0.0
    counts: Dict[MaterialType, int] = field(default_factory=dict)


@dataclass
class Project:
    id: str
    user_id: str
    project_name: str
    saved_at: str
    budget: float = 0.0
    current_floor: int = 1
    materials: Dict[str, int] = field(default_factory=dict)
    building: List[Dict] = field(default_factory=list)
    version: str = "1.0"

    def to_record(self) -> Dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "projectName": self.project_name,
            "version": self.version,
            "savedAt": self.saved_at,
            "budget": self.budget,
            "currentFloor": self.current_floor,
            "materials": dict(self.materials),
            "building": [dict(b) for b in self.building],
        }

    @classmethod
    def from_record(cls, data: Dict) -> "Project":
        """Build from a stored record; raises StorageError when a field has the wrong shape."""
        try:
            return cls(
                id=str(data["id"]),
                user_id=str(data.get("userId", "")),
                project_name=str(data.get("projectName", "")),
                saved_at=str(data.get("savedAt", "")),
                budget=float(data.get("budget") or 0),
                current_floor=int(data.get("currentFloor", 1)),
                materials=dict(data.get("materials") or {}),
                building=list(data.get("building") or []),
                version=str(data.get("version", "1.0")),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise StorageError(f"Project record is corrupt: {e!r}") from e


@dataclass
class User:
    id: str
    email: str
    name: str
    user_type: str = "customer"  # "customer" | "admin"
    created_at: str = ""

    @property
    def is_admin(self) -> bool:
        return self.user_type == "admin"
