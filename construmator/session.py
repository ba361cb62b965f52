from __future__ import annotations
import logging
from typing import Callable, Dict, List, Optional

from .camera import Camera
from .engine import PlacementEngine
from .floors import FloorLayers
from .models import BuildStats, Floor, MaterialType, Mode, PlacedBlock
from .stats import compute_stats

logger = logging.getLogger(__name__)


class EditorSession:
    """One editing session: camera, placement engine, floors and budget.

    The Qt layer calls these methods from its event handlers and re-renders
    from the listeners; nothing here knows about widgets.
    """

    def __init__(self, camera: Optional[Camera] = None, engine: Optional[PlacementEngine] = None):
        self.camera = camera or Camera()
        self.engine = engine or PlacementEngine()
        self.floors = FloorLayers()
        self.budget: float = 0.0
        self._listeners: List[Callable[[], None]] = []
        self._camera_listeners: List[Callable[[], None]] = []

    # ---- listeners ----
    def subscribe(self, callback: Callable[[], None]):
        self._listeners.append(callback)

    def notify(self):
        for cb in list(self._listeners):
            cb()

    def subscribe_camera(self, callback: Callable[[], None]):
        """Pan, zoom and resize only; content listeners are not called for these."""
        self._camera_listeners.append(callback)

    def notify_camera(self):
        for cb in list(self._camera_listeners):
            cb()

    # ---- modes ----
    @property
    def mode(self) -> Mode:
        return self.engine.mode

    def select_material(self, material) -> MaterialType:
        m = self.engine.select_material(material)
        self.notify()
        return m

    def toggle_delete_mode(self) -> bool:
        on = self.engine.toggle_delete_mode()
        self.notify()
        return on

    def set_idle(self):
        self.engine.set_idle()
        self.notify()

    # ---- pointer ----
    def click(self, vx: float, vy: float) -> Optional[PlacedBlock]:
        """Click on empty canvas at viewport point (vx, vy)."""
        if self.camera.consume_drag() or self.camera.is_panning:
            return None
        if self.engine.delete_mode:
            return None
        cx, cy = self.camera.to_canvas(vx, vy)
        block = self.engine.place(cx, cy, self.floors.current)
        if block is not None:
            self.notify()
        return block

    def click_block(self, block_id: int) -> bool:
        if self.camera.consume_drag():
            return False
        removed = self.engine.delete(block_id, self.floors.current)
        if removed:
            self.notify()
        return removed

    def begin_pan(self, px: float, py: float):
        self.camera.begin_pan(px, py)

    def drag(self, px: float, py: float):
        if self.camera.is_panning:
            self.camera.drag_to(px, py)
            self.notify_camera()

    def end_pan(self) -> bool:
        return self.camera.end_pan()

    def wheel(self, vx: float, vy: float, delta_y: float) -> float:
        z = self.camera.zoom_at(vx, vy, delta_y)
        self.notify_camera()
        return z

    def resize_viewport(self, w: float, h: float):
        self.camera.resize(w, h)
        self.notify_camera()

    # ---- floors / bulk ----
    def switch_floor(self, floor) -> Floor:
        f = self.floors.switch(floor)
        self.notify()
        return f

    def visibility(self) -> Dict[int, bool]:
        return self.floors.visibility(self.engine.blocks)

    def clear(self):
        self.engine.clear()
        logger.debug("cleared build")
        self.notify()

    def set_budget(self, budget: float):
        self.budget = float(budget or 0)
        self.notify()

    @property
    def stats(self) -> BuildStats:
        return compute_stats(self.engine.blocks, self.engine.counts)
