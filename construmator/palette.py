from __future__ import annotations
from typing import Dict, Optional
from PySide6.QtCore import Qt, QRectF, QSize, Signal
from PySide6.QtGui import QColor, QFont, QIcon, QPainter, QPen, QPixmap
from PySide6.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QScrollArea, QLabel

from .estimator import unit_cost
from .items import MATERIAL_LABELS, material_color
from .models import MaterialType


def make_icon(material: MaterialType, size: int = 32) -> QIcon:
    pm = QPixmap(size, size); pm.fill(Qt.transparent)
    p = QPainter(pm); p.setRenderHint(QPainter.Antialiasing, True)
    color = material_color(material)
    p.setBrush(color); p.setPen(QPen(color.darker(140), 1))
    r = QRectF(2, 2, size - 4, size - 4)
    p.drawRoundedRect(r, 4, 4)
    p.setPen(Qt.black if material == MaterialType.CERAMIC_TILE else Qt.white)
    p.setFont(QFont("", 7, QFont.Bold))
    p.drawText(r, Qt.AlignCenter, MATERIAL_LABELS.get(material, ""))
    p.end()
    return QIcon(pm)


class MaterialTile(QWidget):
    clicked = Signal(object)  # MaterialType

    def __init__(self, material: MaterialType, parent: QWidget | None = None):
        super().__init__(parent)
        self.material = material
        self.selected = False
        self.setCursor(Qt.PointingHandCursor)
        self.setToolTip(f"{material.value}: ₱{unit_cost(material):,.0f} each")

    def sizeHint(self) -> QSize:
        return QSize(110, 86)

    def set_selected(self, on: bool):
        self.selected = on
        self.update()

    def paintEvent(self, ev):
        p = QPainter(self); p.setRenderHint(QPainter.Antialiasing)
        frame = QRectF(2, 2, self.width() - 4, self.height() - 4)
        p.setBrush(QColor("#22223b") if not self.selected else QColor("#3b2f5c"))
        p.setPen(QPen(QColor("#ff00ff") if self.selected else QColor("#3b3b5c"), 3 if self.selected else 1))
        p.drawRoundedRect(frame, 8, 8)

        sw = QRectF((self.width() - 36) / 2, 8, 36, 36)
        color = material_color(self.material)
        p.setBrush(color); p.setPen(Qt.NoPen)
        p.drawRoundedRect(sw, 6, 6)

        p.setPen(QColor("#e5e7eb"))
        p.setFont(QFont("", 8, QFont.DemiBold))
        p.drawText(QRectF(0, 48, self.width(), 16), Qt.AlignCenter, self.material.value.replace("_", " "))
        p.setPen(QColor("#9ca3af"))
        p.setFont(QFont("", 7))
        p.drawText(QRectF(0, 64, self.width(), 14), Qt.AlignCenter, f"₱{unit_cost(self.material):,.0f}")

    def mouseReleaseEvent(self, ev):
        if ev.button() == Qt.LeftButton and self.rect().contains(ev.position().toPoint()):
            self.clicked.emit(self.material)
        super().mouseReleaseEvent(ev)


class PalettePanel(QWidget):
    materialSelected = Signal(object)  # MaterialType

    def __init__(self, parent=None):
        super().__init__(parent)
        self._tiles: Dict[MaterialType, MaterialTile] = {}
        self._build_ui()

    def _build_ui(self):
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        cap = QLabel("  Materials")
        cap.setStyleSheet("font-weight:700; padding:8px 0;")
        root.addWidget(cap)

        self.scroll = QScrollArea(self)
        self.scroll.setWidgetResizable(True)
        root.addWidget(self.scroll, 1)

        self.content = QWidget()
        self.content.setObjectName("PaletteContent")
        self.scroll.setWidget(self.content)

        grid = QGridLayout(self.content)
        grid.setContentsMargins(8, 8, 8, 8)
        grid.setHorizontalSpacing(8); grid.setVerticalSpacing(8)
        for i, material in enumerate(MaterialType):
            tile = MaterialTile(material)
            tile.clicked.connect(self._on_tile)
            grid.addWidget(tile, i // 2, i % 2)
            self._tiles[material] = tile
        grid.setRowStretch(len(MaterialType) // 2 + 1, 1)

    def _on_tile(self, material: MaterialType):
        self.set_selected(material)
        self.materialSelected.emit(material)

    def set_selected(self, material: Optional[MaterialType]):
        for m, tile in self._tiles.items():
            tile.set_selected(m == material)
