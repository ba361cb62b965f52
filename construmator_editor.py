#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations
import sys, logging
from datetime import date
from typing import Optional
from PySide6.QtCore import Qt, QSize
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QToolBar, QStatusBar, QMessageBox, QDockWidget, QStyle,
    QInputDialog, QDialog, QLabel, QVBoxLayout, QHBoxLayout, QListWidget, QListWidgetItem, QPushButton
)

from construmator import config
from construmator import (EditorSession, LocalAuth, ProjectStore, ProjectPersistence,
                          ConstrumatorError, Mode)
from construmator.scene import PlanScene, PlanView
from construmator.palette import PalettePanel
from construmator.summary import SummaryPanel
from construmator.estimate_dialog import EstimateDialog
from construmator.admin import recent_projects
from construmator.utils import CANVAS_W, CANVAS_H

logger = logging.getLogger(__name__)


def make_services():
    auth = LocalAuth(config.USERS_FILE, session_hours=config.SESSION_HOURS)
    store = ProjectStore(config.PROJECTS_FILE)
    return auth, ProjectPersistence(store, auth)


class SavedProjectsDialog(QDialog):
    """The current user's projects, newest first; load or delete."""

    def __init__(self, persistence: ProjectPersistence, parent=None):
        super().__init__(parent)
        self.persistence = persistence
        self.selected_id: Optional[str] = None
        self.setWindowTitle("Saved projects")
        self.resize(460, 380)

        lay = QVBoxLayout(self)
        self.list = QListWidget()
        lay.addWidget(self.list, 1)
        row = QHBoxLayout()
        self.btn_load = QPushButton("Load")
        self.btn_delete = QPushButton("Delete")
        self.btn_close = QPushButton("Close")
        row.addWidget(self.btn_load); row.addWidget(self.btn_delete); row.addStretch(1); row.addWidget(self.btn_close)
        lay.addLayout(row)

        self.btn_load.clicked.connect(self._load)
        self.btn_delete.clicked.connect(self._delete)
        self.btn_close.clicked.connect(self.reject)
        self.list.itemDoubleClicked.connect(lambda _: self._load())
        self._refresh()

    def _refresh(self):
        self.list.clear()
        try:
            projects = self.persistence.list_projects()
        except ConstrumatorError as e:
            QMessageBox.critical(self, "Saved projects", str(e)); return
        for p in recent_projects(projects, limit=len(projects)):
            it = QListWidgetItem(f"{p.project_name}  ·  {p.saved_at[:16].replace('T', ' ')}  ·  {len(p.building)} blocks")
            it.setData(Qt.UserRole, p.id)
            self.list.addItem(it)

    def _current_id(self) -> Optional[str]:
        it = self.list.currentItem()
        return it.data(Qt.UserRole) if it else None

    def _load(self):
        pid = self._current_id()
        if not pid: return
        self.selected_id = pid
        self.accept()

    def _delete(self):
        pid = self._current_id()
        if not pid: return
        if QMessageBox.question(self, "Delete project", "Delete the selected project?") != QMessageBox.Yes:
            return
        try:
            ok = self.persistence.delete(pid)
        except ConstrumatorError as e:
            QMessageBox.critical(self, "Delete project", str(e)); return
        if not ok:
            QMessageBox.warning(self, "Delete project", "Failed to delete project.")
        self._refresh()


class MainWindow(QMainWindow):
    def __init__(self, auth: LocalAuth, persistence: ProjectPersistence, project_id: Optional[str] = None):
        super().__init__()
        self.auth = auth
        self.persistence = persistence
        self.setWindowTitle("CONSTRUMATOR · 2D Builder")
        self.resize(1280, 860)

        # 1) Session, scene, view
        self.session = EditorSession()
        self.scene = PlanScene(self.session)
        self.view = PlanView(self.scene, status_cb=self._status)
        self.view.errorRaised.connect(lambda msg: QMessageBox.warning(self, "Builder", msg))
        self.setCentralWidget(self.view)

        # 2) Summary dock
        self.summary = SummaryPanel(self.session, self)
        self.summary.errorRaised.connect(lambda msg: QMessageBox.warning(self, "Finalize", msg))
        self.summary_dock = QDockWidget("Summary", self)
        self.summary_dock.setWidget(self.summary)
        self.summary_dock.setAllowedAreas(Qt.LeftDockWidgetArea | Qt.RightDockWidgetArea)
        self.summary_dock.setMinimumWidth(280)
        self.addDockWidget(Qt.RightDockWidgetArea, self.summary_dock)

        # 3) Materials palette
        self.palette = PalettePanel()
        self.palette.materialSelected.connect(self._select_material)
        self.palette_dock = QDockWidget("Materials", self)
        self.palette_dock.setWidget(self.palette)
        self.palette_dock.setAllowedAreas(Qt.LeftDockWidgetArea | Qt.RightDockWidgetArea)
        self.palette_dock.setMinimumWidth(250)
        self.palette_dock.setMaximumWidth(420)
        self.addDockWidget(Qt.LeftDockWidgetArea, self.palette_dock)

        # 4) Toolbar and status bar
        self._build_toolbar()
        self.setStatusBar(QStatusBar(self))
        self.lbl_info = QLabel("")
        self.statusBar().addPermanentWidget(self.lbl_info)
        self.view.scaleChanged.connect(lambda _: self._update_status())
        self.session.subscribe(self._update_status)

        if project_id:
            self._load_project(project_id)
        self._update_status()

    def _build_toolbar(self):
        tb = QToolBar("Builder", self)
        tb.setMovable(False)
        tb.setIconSize(QSize(18, 18))
        tb.setToolButtonStyle(Qt.ToolButtonTextBesideIcon)
        self.addToolBar(Qt.TopToolBarArea, tb)
        style = self.style()

        self.act_navigate = QAction(style.standardIcon(QStyle.SP_ArrowUp), "Navigate", self, checkable=True)
        self.act_navigate.setToolTip("Drag to pan the map; clicks do not place blocks")
        self.act_navigate.toggled.connect(self.view.set_navigate)

        self.act_delete = QAction(style.standardIcon(QStyle.SP_TrashIcon), "Delete Mode", self, checkable=True)
        self.act_delete.setShortcut(QKeySequence("D"))
        self.act_delete.triggered.connect(self._toggle_delete)

        self.act_clear = QAction(style.standardIcon(QStyle.SP_DialogResetButton), "Clear", self)
        self.act_clear.triggered.connect(self._clear)

        self.act_save = QAction(style.standardIcon(QStyle.SP_DialogSaveButton), "Save", self)
        self.act_save.setShortcut(QKeySequence("Ctrl+S"))
        self.act_save.triggered.connect(self._save_project_dialog)

        self.act_open = QAction(style.standardIcon(QStyle.SP_DirOpenIcon), "My projects…", self)
        self.act_open.setShortcut(QKeySequence("Ctrl+O"))
        self.act_open.triggered.connect(self._open_project_dialog)

        self.act_finalize = QAction(style.standardIcon(QStyle.SP_DialogApplyButton), "Finalize", self)
        self.act_finalize.triggered.connect(self._finalize)

        self.act_estimate = QAction(style.standardIcon(QStyle.SP_FileDialogDetailedView), "Quick estimate…", self)
        self.act_estimate.triggered.connect(lambda: EstimateDialog(self).exec())

        self.act_logout = QAction(style.standardIcon(QStyle.SP_DialogCloseButton), "Logout", self)
        self.act_logout.triggered.connect(self._logout)

        for a in (self.act_navigate, self.act_delete, self.act_clear):
            tb.addAction(a)
        tb.addSeparator()
        for a in (self.act_save, self.act_open, self.act_finalize, self.act_estimate):
            tb.addAction(a)
        tb.addSeparator()
        tb.addAction(self.act_logout)

    # ---- actions ----
    def _select_material(self, material):
        self.session.select_material(material)
        self.act_delete.setChecked(False)
        self.view.cursor_for_mode()
        self._status(f"Click to place {material.value.upper()}")

    def _toggle_delete(self):
        on = self.session.toggle_delete_mode()
        self.act_delete.setChecked(on)
        self.palette.set_selected(None)
        self.view.cursor_for_mode()
        self._status("Delete mode enabled: click blocks to remove them" if on else "Delete mode disabled")

    def _clear(self):
        if len(self.session.engine) and QMessageBox.question(
                self, "Clear", "Remove every block on both floors?") != QMessageBox.Yes:
            return
        self.session.clear()
        self._status("Build cleared")

    def _finalize(self):
        self.summary_dock.show()
        self.summary.finalize()

    def _save_project_dialog(self):
        name, ok = QInputDialog.getText(self, "Save Project", "Project Name:",
                                        text=f"Project {date.today():%m/%d/%Y}")
        if not ok:
            return
        try:
            project = self.persistence.save(self.session, name)
        except ConstrumatorError as e:
            QMessageBox.critical(self, "Save", str(e)); return
        self._status(f'Project "{project.project_name}" saved')

    def _open_project_dialog(self):
        dlg = SavedProjectsDialog(self.persistence, self)
        if dlg.exec() == QDialog.Accepted and dlg.selected_id:
            self._load_project(dlg.selected_id)

    def _load_project(self, project_id: str):
        try:
            project = self.persistence.load(self.session, project_id)
        except ConstrumatorError as e:
            logger.warning("load %s failed: %s", project_id, e)
            QMessageBox.critical(self, "Load", str(e)); return
        # a loaded build starts with nothing selected
        self.session.set_idle()
        self.palette.set_selected(None)
        self.act_delete.setChecked(False)
        self._status(f'Project "{project.project_name}" loaded')

    def _logout(self):
        self.auth.logout()
        from start_window import StartWindow
        self.close()
        self._welcome = StartWindow(self.auth, self.persistence)
        self._welcome.show()

    def _status(self, text: str):
        self.statusBar().showMessage(text, 3000)

    def _update_status(self):
        s = self.session
        mode = {Mode.IDLE: "Idle", Mode.DELETE: "Delete"}.get(s.mode, f"Place {s.engine.material.value if s.engine.material else ''}")
        user = self.auth.current_user()
        self.lbl_info.setText(
            f"Mode: {mode} | {s.floors.label} | Zoom: {int(round(s.camera.zoom * 100))}% | "
            f"Canvas: {int(CANVAS_W)}×{int(CANVAS_H)} | {user.name if user else 'Guest'}"
        )


def main():
    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    from start_window import StartWindow
    auth, persistence = make_services()
    win = StartWindow(auth, persistence)
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
