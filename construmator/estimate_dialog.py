from __future__ import annotations
from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog, QWidget, QVBoxLayout, QFormLayout, QComboBox, QDoubleSpinBox, QLabel,
    QHBoxLayout, QPushButton, QMessageBox, QGroupBox
)

from .errors import ValidationError
from .estimator import Estimate, RoomDimensions, estimate_blueprint, estimate_manual

HOUSE_TYPES = [("", "Select house type…"), ("bungalow", "Bungalow"), ("two-story", "Two-story"),
               ("duplex", "Duplex"), ("customized", "Customized")]


def _feet(maximum: float = 500) -> QDoubleSpinBox:
    s = QDoubleSpinBox()
    s.setRange(0, maximum); s.setDecimals(1); s.setSingleStep(1); s.setSuffix(" ft")
    return s


class EstimateDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Quick estimate")
        self.setMinimumWidth(420)
        root = QVBoxLayout(self)

        inp = QGroupBox("Room")
        f = QFormLayout(inp)
        f.setLabelAlignment(Qt.AlignRight)
        self.cb_type = QComboBox()
        for key, text in HOUSE_TYPES:
            self.cb_type.addItem(text, key)
        self.sp_len, self.sp_wid, self.sp_hei = _feet(), _feet(), _feet(50)
        self.sp_door_w, self.sp_door_h = _feet(20), _feet(20)
        self.sp_win_w, self.sp_win_h = _feet(20), _feet(20)
        self.sp_budget = QDoubleSpinBox()
        self.sp_budget.setRange(0, 1e10); self.sp_budget.setDecimals(2)
        self.sp_budget.setSingleStep(10000); self.sp_budget.setPrefix("₱ ")
        f.addRow("House type:", self.cb_type)
        f.addRow("Length:", self.sp_len)
        f.addRow("Width:", self.sp_wid)
        f.addRow("Height:", self.sp_hei)
        f.addRow("Door W × H:", self._pair(self.sp_door_w, self.sp_door_h))
        f.addRow("Window W × H:", self._pair(self.sp_win_w, self.sp_win_h))
        f.addRow("Budget:", self.sp_budget)
        root.addWidget(inp)

        row = QHBoxLayout()
        self.btn_calc = QPushButton("Calculate")
        self.btn_blueprint = QPushButton("Estimate from blueprint")
        self.btn_calc.clicked.connect(self._calculate)
        self.btn_blueprint.clicked.connect(self._blueprint)
        row.addWidget(self.btn_calc); row.addWidget(self.btn_blueprint)
        root.addLayout(row)

        self.lbl_result = QLabel("")
        self.lbl_result.setTextFormat(Qt.PlainText)
        self.lbl_result.setWordWrap(True)
        root.addWidget(self.lbl_result)

    def _pair(self, a, b):
        w = QWidget(); lay = QHBoxLayout(w); lay.setContentsMargins(0, 0, 0, 0)
        lay.addWidget(a); lay.addWidget(QLabel("×")); lay.addWidget(b)
        return w

    def _calculate(self):
        dims = RoomDimensions(self.sp_len.value(), self.sp_wid.value(), self.sp_hei.value(),
                              self.sp_door_w.value(), self.sp_door_h.value(),
                              self.sp_win_w.value(), self.sp_win_h.value())
        try:
            est = estimate_manual(self.cb_type.currentData(), dims, self.sp_budget.value())
        except ValidationError as e:
            QMessageBox.warning(self, "Estimate", str(e)); return
        self._show(est, full=True)

    def _blueprint(self):
        try:
            est = estimate_blueprint(self.sp_budget.value())
        except ValidationError as e:
            QMessageBox.warning(self, "Estimate", str(e)); return
        self._show(est, full=False)

    def _show(self, est: Estimate, full: bool):
        lines = [
            f"Blocks: {est.blocks:,} pcs",
            f"Cement: {est.cement:,} bags",
            f"Steel: {est.steel:,} pcs",
            f"Sand: {est.sand} m³",
        ]
        if full:
            lines += [f"Flooring: {est.flooring} m²", f"Ceiling: {est.ceiling} m²",
                      f"Roofing: {est.roofing} m²"]
        lines += [
            f"Materials: ₱{est.materials_cost:,.2f}",
            f"Labor: ₱{est.labor_cost:,.2f}",
            f"Total: ₱{est.total_cost:,.2f}",
            f"Remaining: ₱{est.remaining:,.2f}",
        ]
        self.lbl_result.setText("\n".join(lines))
