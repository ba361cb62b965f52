from __future__ import annotations
from PySide6.QtCore import Qt, QRectF
from PySide6.QtGui import QBrush, QColor, QPainter, QPen, QFont
from PySide6.QtWidgets import QGraphicsRectItem, QGraphicsItem

from .models import MaterialType, PlacedBlock
from .estimator import unit_cost
from .utils import CELL

MATERIAL_COLORS = {
    MaterialType.BLOCK: "#dc2626", MaterialType.STEEL: "#6b7280", MaterialType.ROOF: "#059669",
    MaterialType.TILE: "#3b82f6", MaterialType.WOOD: "#92400e", MaterialType.DOOR: "#16a34a",
    MaterialType.WINDOW: "#06b6d4", MaterialType.PLYWOOD: "#8b5a2b",
    MaterialType.METAL_SHEET: "#64748b", MaterialType.CERAMIC_TILE: "#e5e7eb",
    MaterialType.TILE_ADHESIVE: "#fbbf24",
}

MATERIAL_LABELS = {
    MaterialType.BLOCK: "CHB", MaterialType.STEEL: "STL", MaterialType.ROOF: "RF",
    MaterialType.TILE: "TL", MaterialType.WOOD: "WD", MaterialType.DOOR: "DR",
    MaterialType.WINDOW: "WN", MaterialType.PLYWOOD: "PLY", MaterialType.METAL_SHEET: "MS",
    MaterialType.CERAMIC_TILE: "CT", MaterialType.TILE_ADHESIVE: "ADH",
}

INACTIVE_OPACITY = 0.3


def material_color(material: MaterialType) -> QColor:
    return QColor(MATERIAL_COLORS.get(material, "#ffffff"))


class BlockItem(QGraphicsRectItem):
    """View of one PlacedBlock. The item knows the block id; the engine never sees the item."""

    def __init__(self, block: PlacedBlock):
        super().__init__(QRectF(0, 0, CELL, CELL))
        self.block_id = block.id
        self.material = block.material
        self.floor = int(block.floor)
        self.setPos(block.x, block.y)
        self.setZValue(float(self.floor))
        self.setFlag(QGraphicsItem.ItemIsSelectable, False)
        self.setFlag(QGraphicsItem.ItemIsMovable, False)
        self.setAcceptHoverEvents(True)
        self._view_mode = "active"  # active | dim

        color = material_color(block.material)
        self.setBrush(QBrush(color))
        self.setPen(QPen(color.darker(140), 1, Qt.SolidLine))
        self.setToolTip(
            f"{block.material.value} · ₱{unit_cost(block.material):,.0f}\n"
            f"Cell: {block.x}, {block.y} · Floor {self.floor}"
        )

    def set_view_mode(self, mode: str):
        self._view_mode = mode
        active = mode == "active"
        self.setOpacity(1.0 if active else INACTIVE_OPACITY)
        # inactive floors ignore clicks
        self.setAcceptedMouseButtons(Qt.AllButtons if active else Qt.NoButton)
        self.update()

    @property
    def is_active(self) -> bool:
        return self._view_mode == "active"

    def paint(self, painter: QPainter, option, widget=None):
        painter.setRenderHint(QPainter.Antialiasing, True)
        r = self.rect().adjusted(1, 1, -1, -1)
        painter.setPen(self.pen())
        painter.setBrush(self.brush())
        painter.drawRoundedRect(r, 4, 4)
        text = QColor("#111827") if self.material == MaterialType.CERAMIC_TILE else QColor(255, 255, 255)
        painter.setPen(text)
        painter.setFont(QFont("", 7, QFont.Bold))
        painter.drawText(r, Qt.AlignCenter, MATERIAL_LABELS.get(self.material, "?"))
