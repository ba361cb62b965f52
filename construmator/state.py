from __future__ import annotations
from datetime import datetime, timezone
from typing import Dict, List, Tuple

from .errors import ValidationError, StorageError
from .models import Floor, MaterialType, Project
from .utils import CELL, in_canvas

RestoredBlock = Tuple[MaterialType, int, int, Floor]


def _coord(value) -> int:
    # stored coordinates must already be whole numbers; nothing is rounded on load
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"coordinate {value!r} is not a number")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"coordinate {value!r} is not a whole number")
    return int(value)


class SessionState:
    """Converts between a live editor session and the stored project record."""

    def __init__(self, cell: int = CELL):
        self.cell = cell

    def serialize(self, session, project_id: str, user_id: str, name: str) -> Project:
        engine = session.engine
        building: List[Dict] = []
        for b in engine.blocks:
            building.append({
                "type": b.material.value,
                "x": b.x, "y": b.y, "z": b.z,
                "floor": int(b.floor),
            })
        return Project(
            id=project_id,
            user_id=user_id,
            project_name=name,
            saved_at=datetime.now(timezone.utc).isoformat(),
            budget=float(session.budget or 0),
            current_floor=int(session.floors.current),
            materials={m.value: n for m, n in engine.counts.items()},
            building=building,
        )

    def parse_building(self, project: Project) -> List[RestoredBlock]:
        """Validate every stored block up front; raises StorageError on the first bad one."""
        out: List[RestoredBlock] = []
        seen = set()
        for i, d in enumerate(project.building):
            try:
                material = MaterialType.parse(d.get("type"))
                floor = Floor.parse(d["floor"]) if "floor" in d else Floor.FIRST
                x, y = _coord(d["x"]), _coord(d["y"])
            except (ValidationError, KeyError, TypeError, ValueError, AttributeError) as e:
                raise StorageError(f"Project {project.id}: block #{i} is invalid ({e})") from e
            if x % self.cell or y % self.cell or not in_canvas(x, y, self.cell):
                raise StorageError(f"Project {project.id}: block #{i} is off-grid at ({x}, {y})")
            key = (x, y, int(floor))
            if key in seen:
                raise StorageError(f"Project {project.id}: two blocks share cell {key}")
            seen.add(key)
            out.append((material, x, y, floor))
        return out

    def deserialize(self, session, project: Project):
        blocks = self.parse_building(project)
        try:
            floor = Floor.parse(project.current_floor)
        except ValidationError as e:
            raise StorageError(f"Project {project.id}: {e}") from e
        # nothing above touched the session
        session.engine.restore(blocks)
        session.floors.switch(floor)
        session.budget = float(project.budget or 0)
