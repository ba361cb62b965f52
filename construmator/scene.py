from __future__ import annotations
import math
from typing import Callable, Dict, Optional

from PySide6.QtCore import Qt, QLineF, QRectF, Signal
from PySide6.QtGui import QColor, QPainter, QPen, QTransform, QWheelEvent
from PySide6.QtWidgets import QGraphicsScene, QGraphicsView

from .errors import ConstrumatorError, OccupiedCellError, OutOfBoundsError
from .hud import FloorsHUD
from .items import BlockItem
from .session import EditorSession
from .utils import CANVAS_W, CANVAS_H, CELL

# ===== Grid visuals =====
MAJOR_EVERY = 5
BG_COLOR = QColor("#1a1a2e")
GRID_MINOR = QColor(255, 255, 255, 28)
GRID_MAJOR = QColor(255, 255, 255, 60)
SCENE_BORDER = QColor("#ff00ff")
SCENE_BORDER_W = 2


class PlanScene(QGraphicsScene):
    """Renders the session's blocks. Items are looked up by block id, never the reverse."""

    def __init__(self, session: EditorSession, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = session
        self.setItemIndexMethod(QGraphicsScene.NoIndex)
        self.setSceneRect(0, 0, CANVAS_W, CANVAS_H)
        self._items: Dict[int, BlockItem] = {}

    def sync(self):
        blocks = {b.id: b for b in self.session.engine.blocks}
        for bid in [bid for bid in self._items if bid not in blocks]:
            self.removeItem(self._items.pop(bid))
        for bid, b in blocks.items():
            if bid not in self._items:
                item = BlockItem(b)
                self.addItem(item)
                self._items[bid] = item
        self.apply_floor_state()

    def apply_floor_state(self):
        """Dim and lock every block that is not on the active floor."""
        vis = self.session.visibility()
        for bid, item in self._items.items():
            item.set_view_mode("active" if vis.get(bid) else "dim")

    def drawBackground(self, painter: QPainter, rect: QRectF):
        painter.fillRect(rect, BG_COLOR)
        step = CELL
        r = rect.intersected(self.sceneRect())
        left = math.floor(r.left() / step) * step
        top = math.floor(r.top() / step) * step
        x = left; i = int(x // step)
        while x <= r.right():
            is_major = (i % MAJOR_EVERY == 0)
            painter.setPen(QPen(GRID_MAJOR if is_major else GRID_MINOR, 1.5 if is_major else 1))
            painter.drawLine(QLineF(x, r.top(), x, r.bottom()))
            x += step; i += 1
        y = top; j = int(y // step)
        while y <= r.bottom():
            is_major = (j % MAJOR_EVERY == 0)
            painter.setPen(QPen(GRID_MAJOR if is_major else GRID_MINOR, 1.5 if is_major else 1))
            painter.drawLine(QLineF(r.left(), y, r.right(), y))
            y += step; j += 1
        painter.setPen(QPen(SCENE_BORDER, SCENE_BORDER_W)); painter.setBrush(Qt.NoBrush)
        painter.drawRect(self.sceneRect())


class PlanView(QGraphicsView):
    """Viewport onto the canvas. Pan/zoom live in session.camera; the view only mirrors them."""

    scaleChanged = Signal(float)
    errorRaised = Signal(str)

    def __init__(self, scene: PlanScene, status_cb: Optional[Callable[[str], None]] = None):
        super().__init__(scene)
        self.session = scene.session
        self._status_cb = status_cb
        self.navigate = False  # map mode: left drag pans, clicks never place
        self._space_down = False
        self._pan_button = None

        self.setRenderHint(QPainter.Antialiasing, True)
        self.setViewportUpdateMode(QGraphicsView.BoundingRectViewportUpdate)
        self.setDragMode(QGraphicsView.NoDrag)
        self.setTransformationAnchor(QGraphicsView.NoAnchor)
        self.setResizeAnchor(QGraphicsView.NoAnchor)
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setMouseTracking(True)

        self.hud = FloorsHUD(self)
        self.hud.reposition()

        self.session.subscribe(self._on_session_changed)
        self.session.subscribe_camera(self._apply_camera)
        self.scene().sync()
        self._apply_camera()

    # ---- session -> view ----
    def _on_session_changed(self):
        self.scene().sync()
        self.hud.set_checked(self.session.floors.current)
        self.cursor_for_mode()

    def _apply_camera(self):
        cam = self.session.camera
        self.setTransform(QTransform.fromScale(cam.zoom, cam.zoom))
        # with the scene anchored at 0,0 the scroll offset is exactly -pan
        self.horizontalScrollBar().setValue(round(-cam.pan_x))
        self.verticalScrollBar().setValue(round(-cam.pan_y))
        self.cursor_for_mode()
        self.scaleChanged.emit(cam.zoom)

    def cursor_for_mode(self):
        if self.session.camera.is_panning:
            self.viewport().setCursor(Qt.ClosedHandCursor)
        elif self.navigate or self._space_down:
            self.viewport().setCursor(Qt.OpenHandCursor)
        elif self.session.engine.delete_mode:
            self.viewport().setCursor(Qt.ForbiddenCursor)
        elif self.session.engine.material is not None:
            self.viewport().setCursor(Qt.CrossCursor)
        else:
            self.viewport().setCursor(Qt.ArrowCursor)

    def set_navigate(self, on: bool):
        self.navigate = bool(on)
        self.cursor_for_mode()

    def _status(self, text: str):
        if self._status_cb:
            self._status_cb(text)

    # ---- Qt events ----
    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.session.resize_viewport(self.viewport().width(), self.viewport().height())
        if getattr(self, "hud", None):
            self.hud.reposition()

    def wheelEvent(self, event: QWheelEvent):
        angle = event.angleDelta().y()
        if angle == 0:
            event.ignore(); return
        p = event.position()
        # Qt reports wheel-up as positive; the camera expects wheel-up negative
        self.session.wheel(p.x(), p.y(), -angle)
        event.accept()

    def _starts_pan(self, event) -> bool:
        if event.button() == Qt.MiddleButton:
            return True
        return event.button() == Qt.LeftButton and (self.navigate or self._space_down)

    def mousePressEvent(self, event):
        if self._starts_pan(event):
            p = event.position()
            self._pan_button = event.button()
            self.session.begin_pan(p.x(), p.y())
            self.cursor_for_mode()
            event.accept()
            return
        event.accept()

    def mouseMoveEvent(self, event):
        if self.session.camera.is_panning:
            p = event.position()
            self.session.drag(p.x(), p.y())
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if self._pan_button is not None and event.button() == self._pan_button:
            self._pan_button = None
            self.session.end_pan()
            # Qt sends no separate click after a pan, so drop the guard here
            self.session.camera.consume_drag()
            self.cursor_for_mode()
            event.accept()
            return
        if event.button() == Qt.LeftButton:
            self._click(event.position())
        event.accept()

    def _click(self, pos):
        # dimmed blocks of the other floor may sit on top
        item = next((it for it in self.items(pos.toPoint())
                     if isinstance(it, BlockItem) and it.is_active), None)
        try:
            if item is not None:
                if self.session.engine.delete_mode:
                    if self.session.click_block(item.block_id):
                        self._status(f"Removed {item.material.value}")
                # clicks on an existing block never place
                return
            if self.session.engine.delete_mode:
                return
            block = self.session.click(pos.x(), pos.y())
            if block is not None:
                self._status(f"Placed {block.material.value} at {block.x}, {block.y}")
        except OutOfBoundsError:
            self._status("Outside the building area")
        except OccupiedCellError:
            self.errorRaised.emit("Block already exists at this position on this floor!")
        except ConstrumatorError as e:
            self.errorRaised.emit(str(e))

    def keyPressEvent(self, event):
        if event.key() == Qt.Key_Space and not self._space_down:
            self._space_down = True
            self.cursor_for_mode()
            event.accept()
            return
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if event.key() == Qt.Key_Space and self._space_down:
            self._space_down = False
            self.cursor_for_mode()
            event.accept()
            return
        super().keyReleaseEvent(event)
