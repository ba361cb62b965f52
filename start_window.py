# start_window.py
from __future__ import annotations
import logging
from typing import Optional
from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QFrame, QPushButton, QListWidget, QListWidgetItem,
    QMessageBox, QLabel, QLineEdit, QComboBox, QStackedWidget, QFormLayout
)

from construmator import ConstrumatorError, LocalAuth, ProjectPersistence
from construmator.admin import (all_projects, dashboard_stats, project_details, recent_projects,
                                user_rows)
from construmator_editor import MainWindow

logger = logging.getLogger(__name__)

# ========= THEME (construction dark) =========
ACCENT           = "#F59E0B"
ACCENT_HOVER     = "#FBBF24"
ACCENT_ACTIVE    = "#D97706"

PANEL_BG         = "rgba(17, 24, 39, 0.88)"
PANEL_STROKE     = "rgba(245, 158, 11, 0.35)"
PANEL_RADIUS     = 14
BTN_RADIUS       = 10

FONT_FAMILY      = "Segoe UI, Inter, Roboto, sans-serif"
TEXT_MAIN        = "#E6E7EA"
TEXT_DIM         = "#9AA4B2"
# =============================================


class StartWindow(QWidget):
    """Login/registration, then the user's recent projects (and a dashboard for admins)."""

    def __init__(self, auth: LocalAuth, persistence: ProjectPersistence):
        super().__init__()
        self.auth = auth
        self.persistence = persistence
        self.editor: Optional[MainWindow] = None
        self.setObjectName("StartRoot")
        self.setWindowTitle("CONSTRUMATOR")
        self.resize(1100, 720)

        root = QVBoxLayout(self); root.setContentsMargins(28, 28, 28, 28); root.setSpacing(0)

        top = QHBoxLayout()
        title = QLabel("CONSTRUMATOR"); title.setObjectName("Brand")
        self.lbl_user = QLabel(""); self.lbl_user.setObjectName("Dim")
        self.btn_logout = QPushButton("Logout"); self._style_action_btn(self.btn_logout)
        top.addWidget(title); top.addStretch(1); top.addWidget(self.lbl_user); top.addSpacing(12); top.addWidget(self.btn_logout)
        root.addLayout(top); root.addSpacing(16)

        self.pages = QStackedWidget(self)
        self.pages.addWidget(self._build_auth_page())
        self.pages.addWidget(self._build_home_page())
        root.addWidget(self.pages, 1)

        self.btn_logout.clicked.connect(self._logout)
        self._apply_qss()
        self._refresh()

    # ---------- PAGES ----------
    def _build_auth_page(self) -> QWidget:
        page = QWidget()
        mid = QHBoxLayout(page); mid.setSpacing(24)

        # Login
        login = QFrame(page); login.setObjectName("Card")
        fl = QFormLayout(login); fl.setContentsMargins(28, 24, 28, 24); fl.setSpacing(10)
        cap = QLabel("Login"); cap.setObjectName("CardTitle"); fl.addRow(cap)
        self.ed_login_email = QLineEdit(); self.ed_login_email.setPlaceholderText("you@example.com")
        self.ed_login_pass = QLineEdit(); self.ed_login_pass.setEchoMode(QLineEdit.Password)
        self.btn_login = QPushButton("Login"); self._style_action_btn(self.btn_login)
        fl.addRow("Email:", self.ed_login_email)
        fl.addRow("Password:", self.ed_login_pass)
        fl.addRow(self.btn_login)
        mid.addWidget(login, 1)

        # Registration
        reg = QFrame(page); reg.setObjectName("Card")
        fr = QFormLayout(reg); fr.setContentsMargins(28, 24, 28, 24); fr.setSpacing(10)
        rcap = QLabel("Create account"); rcap.setObjectName("CardTitle"); fr.addRow(rcap)
        self.ed_reg_name = QLineEdit()
        self.ed_reg_email = QLineEdit()
        self.ed_reg_pass = QLineEdit(); self.ed_reg_pass.setEchoMode(QLineEdit.Password)
        self.ed_reg_confirm = QLineEdit(); self.ed_reg_confirm.setEchoMode(QLineEdit.Password)
        self.cb_reg_type = QComboBox(); self.cb_reg_type.addItems(["customer", "admin"])
        self.btn_register = QPushButton("Register"); self._style_action_btn(self.btn_register)
        fr.addRow("Name:", self.ed_reg_name)
        fr.addRow("Email:", self.ed_reg_email)
        fr.addRow("Password:", self.ed_reg_pass)
        fr.addRow("Confirm:", self.ed_reg_confirm)
        fr.addRow("Account:", self.cb_reg_type)
        fr.addRow(self.btn_register)
        mid.addWidget(reg, 1)

        self.btn_login.clicked.connect(self._login)
        self.ed_login_pass.returnPressed.connect(self._login)
        self.btn_register.clicked.connect(self._register)
        return page

    def _build_home_page(self) -> QWidget:
        page = QWidget()
        mid = QHBoxLayout(page); mid.setSpacing(24)
        left = QVBoxLayout(); left.setSpacing(22)

        actions = QFrame(page); actions.setObjectName("Card")
        vact = QVBoxLayout(actions); vact.setContentsMargins(28, 24, 28, 24); vact.setSpacing(12)
        cap = QLabel("Quick start"); cap.setObjectName("CardTitle"); vact.addWidget(cap)
        self.btn_new = QPushButton("New build"); self._style_action_btn(self.btn_new)
        self.btn_open = QPushButton("Open selected"); self._style_action_btn(self.btn_open)
        vact.addWidget(self.btn_new); vact.addWidget(self.btn_open)
        left.addWidget(actions)

        recent = QFrame(page); recent.setObjectName("Card")
        vrec = QVBoxLayout(recent); vrec.setContentsMargins(24, 20, 24, 20); vrec.setSpacing(10)
        rcap = QLabel("My projects"); rcap.setObjectName("CardTitle"); vrec.addWidget(rcap)
        self.list_recent = QListWidget(); self.list_recent.setObjectName("RecentList")
        vrec.addWidget(self.list_recent, 1)
        left.addWidget(recent, 1)
        mid.addLayout(left, 1)

        # Admin dashboard
        self.admin_card = QFrame(page); self.admin_card.setObjectName("Card")
        vad = QVBoxLayout(self.admin_card); vad.setContentsMargins(24, 20, 24, 20); vad.setSpacing(10)
        acap = QLabel("Dashboard"); acap.setObjectName("CardTitle"); vad.addWidget(acap)
        self.lbl_dashboard = QLabel(""); self.lbl_dashboard.setTextFormat(Qt.PlainText)
        vad.addWidget(self.lbl_dashboard)
        ucap = QLabel("Users"); ucap.setObjectName("CardTitle"); vad.addWidget(ucap)
        self.list_users = QListWidget(); self.list_users.setObjectName("RecentList")
        vad.addWidget(self.list_users, 1)
        pcap = QLabel("Recent projects (double-click for details)"); pcap.setObjectName("CardTitle"); vad.addWidget(pcap)
        self.list_all = QListWidget(); self.list_all.setObjectName("RecentList")
        vad.addWidget(self.list_all, 1)
        mid.addWidget(self.admin_card, 1)
        self._all_projects = {}

        self.list_all.itemDoubleClicked.connect(self._show_project_details)

        self.btn_new.clicked.connect(lambda: self._launch_editor(None))
        self.btn_open.clicked.connect(self._open_selected)
        self.list_recent.itemDoubleClicked.connect(lambda it: self._launch_editor(it.data(Qt.UserRole)))
        return page

    # ---------- STYLE ----------
    def _apply_qss(self):
        self.setStyleSheet(f"""
        QWidget#StartRoot {{
            background: qlineargradient(x1:0, y1:0, x2:1, y2:1, stop:0 #111827, stop:1 #0B0F19);
            color: {TEXT_MAIN};
            font-family: {FONT_FAMILY};
        }}
        #Brand {{ font-size: 20px; font-weight: 800; color: {ACCENT}; letter-spacing: 2px; }}
        #Dim {{ color: {TEXT_DIM}; }}
        #Card {{
            background: {PANEL_BG};
            border: 1px solid {PANEL_STROKE};
            border-radius: {PANEL_RADIUS}px;
        }}
        #CardTitle {{ color: {TEXT_MAIN}; font-weight: 700; font-size: 15px; }}
        QLabel {{ color: {TEXT_MAIN}; }}
        QLineEdit, QComboBox {{
            background: rgba(255,255,255,0.06); color: {TEXT_MAIN};
            border: 1px solid {PANEL_STROKE}; border-radius: 8px; padding: 6px 8px;
        }}
        QPushButton#ActionButton {{
            background: {ACCENT}; color: #1F1300;
            border: none; border-radius: {BTN_RADIUS}px;
            padding: 10px 14px; font-weight: 700;
        }}
        QPushButton#ActionButton:hover   {{ background: {ACCENT_HOVER}; }}
        QPushButton#ActionButton:pressed {{ background: {ACCENT_ACTIVE}; }}
        QPushButton#ActionButton:disabled{{ background: #374151; color: #6B7280; }}
        #RecentList {{
            background: rgba(255,255,255,0.06); color: {TEXT_MAIN};
            border: 1px solid {PANEL_STROKE}; border-radius: 10px; padding: 6px;
        }}
        #RecentList::item {{ padding: 7px 10px; }}
        #RecentList::item:selected {{ background: rgba(245, 158, 11, 0.25); border-radius: 6px; }}
        """)

    def _style_action_btn(self, b: QPushButton):
        b.setObjectName("ActionButton")
        b.setCursor(Qt.PointingHandCursor)
        b.setMinimumHeight(36)

    # ---------- DATA ----------
    def _refresh(self):
        user = self.auth.current_user()
        self.btn_logout.setVisible(user is not None)
        if user is None:
            self.lbl_user.setText("")
            self.pages.setCurrentIndex(0)
            return
        self.lbl_user.setText(f"{user.name} ({user.user_type})")
        self.pages.setCurrentIndex(1)
        self._load_recent()
        self.admin_card.setVisible(user.is_admin)
        if user.is_admin:
            self._load_dashboard()

    def _load_recent(self):
        self.list_recent.clear()
        try:
            projects = self.persistence.list_projects()
        except ConstrumatorError as e:
            QMessageBox.critical(self, "Projects", str(e)); return
        for p in recent_projects(projects, limit=len(projects)):
            it = QListWidgetItem(f"{p.project_name}  ·  {p.saved_at[:10]}  ·  {len(p.building)} blocks")
            it.setData(Qt.UserRole, p.id)
            self.list_recent.addItem(it)
        self.btn_open.setEnabled(self.list_recent.count() > 0)

    def _load_dashboard(self):
        try:
            projects = all_projects(self.persistence.store)
            users = self.auth.list_users()
        except ConstrumatorError as e:
            QMessageBox.critical(self, "Dashboard", str(e)); return
        names = {u.id: u.name for u in users}
        s = dashboard_stats(users, projects)
        self.lbl_dashboard.setText(
            f"Users: {s.total_users} ({s.customers} customers, {s.admins} admins)\n"
            f"Projects: {s.total_projects} ({s.with_budget} with budget)\n"
            f"Blocks placed: {s.total_blocks} (avg {s.avg_blocks} per project)"
        )
        self.list_users.clear()
        for name, email, kind, registered, count in user_rows(users, projects):
            self.list_users.addItem(f"{name}  ·  {email}  ·  {kind}  ·  {registered}  ·  {count} projects")
        self._all_projects = {p.id: p for p in projects}
        self.list_all.clear()
        for p in recent_projects(projects):
            it = QListWidgetItem(f"{p.project_name}  ·  {names.get(p.user_id, 'Unknown')}  ·  {p.saved_at[:10]}")
            it.setData(Qt.UserRole, p.id)
            self.list_all.addItem(it)

    def _show_project_details(self, it: QListWidgetItem):
        project = self._all_projects.get(it.data(Qt.UserRole))
        if project is None:
            return
        QMessageBox.information(self, "Project Details",
                                "\n".join(f"{label}: {value}" for label, value in project_details(project)))

    # ---------- ACTIONS ----------
    def _login(self):
        try:
            self.auth.login(self.ed_login_email.text(), self.ed_login_pass.text())
        except ConstrumatorError as e:
            QMessageBox.warning(self, "Login", str(e)); return
        self.ed_login_pass.clear()
        self._refresh()

    def _register(self):
        if self.ed_reg_pass.text() != self.ed_reg_confirm.text():
            QMessageBox.warning(self, "Register", "Passwords do not match"); return
        try:
            self.auth.register(self.ed_reg_email.text(), self.ed_reg_pass.text(),
                               self.ed_reg_name.text(), self.cb_reg_type.currentText())
            self.auth.login(self.ed_reg_email.text(), self.ed_reg_pass.text())
        except ConstrumatorError as e:
            QMessageBox.warning(self, "Register", str(e)); return
        for ed in (self.ed_reg_name, self.ed_reg_email, self.ed_reg_pass, self.ed_reg_confirm):
            ed.clear()
        self._refresh()

    def _logout(self):
        self.auth.logout()
        self._refresh()

    def _open_selected(self):
        it = self.list_recent.currentItem()
        if it is None:
            QMessageBox.information(self, "Open", "Select a project first."); return
        self._launch_editor(it.data(Qt.UserRole))

    def _launch_editor(self, project_id: Optional[str]):
        if not self.auth.is_logged_in():
            QMessageBox.warning(self, "Session", "Please login to continue")
            self._refresh()
            return
        self.hide()
        self.editor = MainWindow(self.auth, self.persistence, project_id)
        self.editor.showMaximized()
        self.close()
