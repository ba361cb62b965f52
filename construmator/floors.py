from __future__ import annotations
import logging
from typing import Dict, Iterable

from .models import Floor, PlacedBlock

logger = logging.getLogger(__name__)


class FloorLayers:
    """Active floor plus the derived per-block interactivity flag."""

    def __init__(self, current=Floor.FIRST):
        self.current = Floor.parse(current)

    def switch(self, floor) -> Floor:
        self.current = Floor.parse(floor)
        logger.debug("active floor -> %d", self.current)
        return self.current

    def is_active(self, block: PlacedBlock) -> bool:
        return int(block.floor) == int(self.current)

    def visibility(self, blocks: Iterable[PlacedBlock]) -> Dict[int, bool]:
        # always recomputed; nothing is cached on the blocks
        return {b.id: self.is_active(b) for b in blocks}

    @property
    def label(self) -> str:
        return "1st Floor" if self.current == Floor.FIRST else "2nd Floor"
