from __future__ import annotations
from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QFormLayout, QDoubleSpinBox, QListWidget, QListWidgetItem,
    QLabel, QPushButton, QGroupBox
)

from .errors import ValidationError
from .estimator import BuildSummary, finalize_build
from .palette import make_icon
from .session import EditorSession
from .stats import format_counts, format_size


def peso(v: float) -> str:
    return f"₱{v:,.2f}"


class SummaryPanel(QWidget):
    """Live counts, size and cost of the build, the budget and the finalised breakdown."""

    errorRaised = Signal(str)

    def __init__(self, session: EditorSession, parent=None):
        super().__init__(parent)
        self.session = session
        self._syncing = False
        self._last = None

        self.setMinimumWidth(260)
        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)
        root.setSpacing(10)

        # ------- Live stats -------
        live = QGroupBox("Build")
        fl = QFormLayout(live)
        fl.setLabelAlignment(Qt.AlignRight)
        self.lbl_counts = QLabel(); self.lbl_counts.setWordWrap(True)
        self.lbl_size = QLabel()
        self.lbl_cost = QLabel(); self.lbl_cost.setStyleSheet("font-weight:700;")
        self.list_materials = QListWidget()
        self.list_materials.setMinimumHeight(120)
        fl.addRow("Materials:", self.lbl_counts)
        fl.addRow(self.list_materials)
        fl.addRow("Stats:", self.lbl_size)
        fl.addRow("Live cost:", self.lbl_cost)
        root.addWidget(live)

        # ------- Budget -------
        bud = QGroupBox("Budget")
        fb = QFormLayout(bud)
        fb.setLabelAlignment(Qt.AlignRight)
        self.sp_budget = QDoubleSpinBox()
        self.sp_budget.setRange(0, 1e10); self.sp_budget.setDecimals(2)
        self.sp_budget.setSingleStep(1000); self.sp_budget.setPrefix("₱ ")
        self.sp_budget.valueChanged.connect(self._apply_budget)
        self.btn_finalize = QPushButton("Finalize")
        self.btn_finalize.clicked.connect(self.finalize)
        fb.addRow("Your budget:", self.sp_budget)
        fb.addRow(self.btn_finalize)
        root.addWidget(bud)

        # ------- Final breakdown -------
        self.grp_final = QGroupBox("Final estimate")
        ff = QFormLayout(self.grp_final)
        ff.setLabelAlignment(Qt.AlignRight)
        self.lbl_materials_cost = QLabel()
        self.lbl_labor = QLabel()
        self.lbl_total = QLabel(); self.lbl_total.setStyleSheet("font-weight:700;")
        self.lbl_remaining = QLabel()
        ff.addRow("Materials:", self.lbl_materials_cost)
        ff.addRow("Labor (40%):", self.lbl_labor)
        ff.addRow("Total:", self.lbl_total)
        ff.addRow("Remaining:", self.lbl_remaining)
        self.grp_final.setVisible(False)
        root.addWidget(self.grp_final)
        root.addStretch(1)

        self.session.subscribe(self.refresh)
        self.refresh()

    def refresh(self):
        stats = self.session.stats
        self.lbl_counts.setText(format_counts(stats.counts))
        self.lbl_size.setText(format_size(stats))
        self.lbl_cost.setText(peso(stats.total_cost))
        self.list_materials.clear()
        for m, n in stats.counts.items():
            self.list_materials.addItem(QListWidgetItem(make_icon(m, 20), f"{m.value}: {n} pcs"))
        if abs(self.sp_budget.value() - self.session.budget) > 1e-9:
            self._syncing = True
            self.sp_budget.setValue(self.session.budget)
            self._syncing = False
        # floor and mode changes also notify; only counts or budget invalidate the breakdown
        key = (tuple(stats.counts.items()), self.session.budget)
        if key != self._last:
            self._last = key
            self.grp_final.setVisible(False)

    def _apply_budget(self, value: float):
        if self._syncing:
            return
        self.session.set_budget(value)

    def finalize(self) -> BuildSummary | None:
        try:
            summary = finalize_build(self.session.engine.counts, self.session.budget)
        except ValidationError as e:
            self.errorRaised.emit(str(e))
            return None
        self.lbl_materials_cost.setText(peso(summary.materials_cost))
        self.lbl_labor.setText(peso(summary.labor_cost))
        self.lbl_total.setText(peso(summary.total_cost))
        self.lbl_remaining.setText(peso(summary.remaining))
        self.lbl_remaining.setStyleSheet("color:#16a34a; font-weight:600;" if summary.remaining >= 0
                                         else "color:#dc2626; font-weight:600;")
        self.grp_final.setVisible(True)
        return summary
