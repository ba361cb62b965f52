from __future__ import annotations
from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QHBoxLayout, QToolButton

from .models import Floor


class FloorsHUD(QWidget):
    """Floor switcher floating over the bottom-right corner of the view."""

    def __init__(self, view):
        super().__init__(view.viewport())
        self.view = view
        self.setObjectName("FloorsHUD")
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setStyleSheet("""
            QWidget#FloorsHUD { background: rgba(26,26,46,0.92); border:1px solid #3b3b5c; border-radius:12px; }
            QToolButton.floor { border:none; padding:6px; border-radius:10px; color:#e5e7eb; font-weight:700; }
            QToolButton.floor:hover { background:#2c2c4a; }
            QToolButton.floor:checked { background:#ff00ff; color:#ffffff; }
        """)

        lay = QHBoxLayout(self)
        lay.setContentsMargins(8, 8, 8, 8)
        lay.setSpacing(6)

        self.buttons = {}
        for floor, text, tooltip in ((Floor.FIRST, "1F", "1st Floor"), (Floor.SECOND, "2F", "2nd Floor")):
            btn = QToolButton(self)
            btn.setProperty("class", "floor")
            btn.setText(text)
            btn.setToolTip(tooltip)
            btn.setCheckable(True)
            btn.setAutoExclusive(True)
            btn.setFixedSize(40, 36)
            btn.clicked.connect(lambda _=False, F=floor: self._set_floor(F))
            lay.addWidget(btn)
            self.buttons[floor] = btn

        self.set_checked(view.session.floors.current)
        self.resize(self.sizeHint())
        self.setMinimumSize(self.sizeHint())
        self.show()
        self.raise_()

    def set_checked(self, floor):
        for f, btn in self.buttons.items():
            btn.setChecked(f == floor)

    def _set_floor(self, floor: Floor):
        self.set_checked(floor)
        self.view.session.switch_floor(floor)

    def reposition(self):
        margin = 12
        vw = self.view.viewport().width()
        vh = self.view.viewport().height()
        self.move(vw - self.width() - margin, vh - self.height() - margin)
