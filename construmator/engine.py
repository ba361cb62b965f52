from __future__ import annotations
import itertools
import logging
import threading
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import OccupiedCellError, OutOfBoundsError, ValidationError
from .models import Floor, MaterialType, Mode, PlacedBlock
from .utils import CELL, snap, in_canvas

logger = logging.getLogger(__name__)


class PlacementEngine:
    """Owns the placement set and the material count index for one editing session."""

    def __init__(self, cell: int = CELL):
        self.cell = cell
        self.mode = Mode.IDLE
        self.material: Optional[MaterialType] = None
        self._blocks: List[PlacedBlock] = []
        self._by_cell: Dict[Tuple[int, int, int], PlacedBlock] = {}
        self._counts: Dict[MaterialType, int] = {}
        self._ids = itertools.count(1)
        self._placing = threading.Lock()

    # ---- modes ----
    def select_material(self, material) -> MaterialType:
        self.material = MaterialType.parse(material)
        self.mode = Mode.PLACEMENT
        return self.material

    def toggle_delete_mode(self) -> bool:
        # either way the material selection is dropped
        self.mode = Mode.IDLE if self.mode == Mode.DELETE else Mode.DELETE
        self.material = None
        return self.mode == Mode.DELETE

    def set_idle(self):
        self.mode = Mode.IDLE
        self.material = None

    @property
    def delete_mode(self) -> bool:
        return self.mode == Mode.DELETE

    # ---- queries ----
    @property
    def blocks(self) -> List[PlacedBlock]:
        return list(self._blocks)

    @property
    def counts(self) -> Dict[MaterialType, int]:
        return dict(self._counts)

    def __len__(self) -> int:
        return len(self._blocks)

    def get(self, block_id: int) -> Optional[PlacedBlock]:
        for b in self._blocks:
            if b.id == block_id:
                return b
        return None

    def block_at(self, x: int, y: int, floor) -> Optional[PlacedBlock]:
        return self._by_cell.get((x, y, int(floor)))

    # ---- mutations ----
    def place(self, cx: float, cy: float, floor) -> Optional[PlacedBlock]:
        """Snap canvas point (cx, cy) to the grid and place the selected material there.

        Returns None when another placement is already in flight.
        """
        if not self._placing.acquire(blocking=False):
            logger.debug("placement already in progress, dropping (%s, %s)", cx, cy)
            return None
        try:
            if self.mode != Mode.PLACEMENT or self.material is None:
                raise ValidationError("Select a material first")
            floor = Floor.parse(floor)
            x, y = snap(cx, self.cell), snap(cy, self.cell)
            if not in_canvas(x, y, self.cell):
                logger.debug("out of bounds: (%s, %s)", x, y)
                raise OutOfBoundsError(cx, cy)
            return self._insert(self.material, x, y, floor)
        finally:
            self._placing.release()

    def delete(self, block_id: int, active_floor) -> bool:
        if self.mode != Mode.DELETE:
            return False
        block = self.get(block_id)
        if block is None or int(block.floor) != int(active_floor):
            return False
        self._blocks.remove(block)
        del self._by_cell[block.cell]
        left = self._counts.get(block.material, 0) - 1
        if left > 0:
            self._counts[block.material] = left
        else:
            self._counts.pop(block.material, None)
        logger.debug("removed %s", block)
        return True

    def clear(self):
        self._blocks.clear()
        self._by_cell.clear()
        self._counts.clear()

    def restore(self, blocks: Iterable[Tuple[MaterialType, int, int, Floor]]):
        """Replace everything with `blocks`, replaying each through the insert path."""
        self.clear()
        for material, x, y, floor in blocks:
            self._insert(material, x, y, floor)

    def _insert(self, material: MaterialType, x: int, y: int, floor: Floor) -> PlacedBlock:
        if (x, y, int(floor)) in self._by_cell:
            raise OccupiedCellError(x, y, int(floor))
        block = PlacedBlock(next(self._ids), material, x, y, floor)
        self._blocks.append(block)
        self._by_cell[block.cell] = block
        self._counts[material] = self._counts.get(material, 0) + 1
        return block
