from __future__ import annotations

from PySide6.QtCore import QSettings, QSize, Qt, Signal
from PySide6.QtGui import QColor, QFont, QIcon, QPainter, QPixmap
from PySide6.QtWidgets import (
    QHBoxLayout, QLabel, QListWidget, QListWidgetItem, QMainWindow, QMessageBox,
    QPlainTextEdit, QPushButton, QStackedWidget, QVBoxLayout, QWidget,
)

from pocket_notes.bootstrap import Services
from pocket_notes.core.errors import DuplicateNameError, PocketNotesError
from pocket_notes.core.models import Group
from pocket_notes.core.store import StoreChange
from pocket_notes.logging_setup import log
from pocket_notes.settings import APP_NAME, MOBILE_BREAKPOINT_PX
from pocket_notes.ui.dialogs import CreateGroupDialog
from pocket_notes.ui.state import UiStateStore

GROUP_ID_ROLE = Qt.UserRole + 1


def badge_pixmap(group: Group, size: int = 40) -> QPixmap:
    """Colored circle with the group's initials."""
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)
    p = QPainter(pm)
    try:
        p.setRenderHint(QPainter.Antialiasing)
        p.setPen(Qt.NoPen)
        p.setBrush(QColor(group.color))
        p.drawEllipse(0, 0, size, size)
        font = QFont()
        font.setBold(True)
        font.setPixelSize(int(size * 0.4))
        p.setFont(font)
        p.setPen(QColor("#FFFFFF"))
        p.drawText(pm.rect(), Qt.AlignCenter, group.initials)
    finally:
        p.end()
    return pm


class NoteInput(QPlainTextEdit):
    """Enter submits, Shift+Enter inserts a newline."""
    submitted = Signal()

    def keyPressEvent(self, event):  # type: ignore[override]
        if event.key() in (Qt.Key_Return, Qt.Key_Enter) and not (event.modifiers() & Qt.ShiftModifier):
            event.accept()
            self.submitted.emit()
            return
        super().keyPressEvent(event)


class PocketNotesWindow(QMainWindow):
    def __init__(self, services: Services, *, settings: QSettings | None = None):
        super().__init__()
        self.setWindowTitle("Pocket Notes")

        self.services = services
        self.store = services.store
        self.selection = services.selection
        self.view = services.view

        self._settings = settings or QSettings(APP_NAME, APP_NAME)
        self._ui_state = UiStateStore(owner=self, settings=self._settings, debounce_ms=400)
        self._mobile = False

        # --- sidebar ---
        self.sidebar = QWidget()
        self.sidebar.setMinimumWidth(280)
        title = QLabel("Pocket Notes")
        title.setStyleSheet("font-size: 24px; font-weight: 600; padding: 12px 4px;")
        self.groups_list = QListWidget()
        self.groups_list.setIconSize(QSize(40, 40))
        self.groups_list.itemClicked.connect(self._on_group_clicked)
        self.add_btn = QPushButton("+")
        self.add_btn.setFixedSize(56, 56)
        self.add_btn.setStyleSheet(
            "font-size: 28px; border-radius: 28px; background: #16008B; color: white;"
        )
        self.add_btn.clicked.connect(self.open_create_group_dialog)

        side_layout = QVBoxLayout(self.sidebar)
        side_layout.setContentsMargins(8, 8, 8, 8)
        side_layout.addWidget(title)
        side_layout.addWidget(self.groups_list, 1)
        side_layout.addWidget(self.add_btn, 0, Qt.AlignRight)

        # --- main area ---
        self.pages = QStackedWidget()
        self.pages.addWidget(self._build_empty_state())
        self.pages.addWidget(self._build_notes_view())

        root = QWidget()
        root_layout = QHBoxLayout(root)
        root_layout.setContentsMargins(0, 0, 0, 0)
        root_layout.setSpacing(0)
        root_layout.addWidget(self.sidebar, 1)
        root_layout.addWidget(self.pages, 3)
        self.setCentralWidget(root)

        self._unsubscribe = self.store.subscribe(self._on_store_changed)
        self.selection.subscribe(lambda _gid: self.refresh_view())

        self._ui_state.restore()
        self.refresh_groups()
        self.refresh_view()
        log.info("Window ready: groups=%d", len(self.store.list_groups()))

    # ───────────────────────── building ─────────────────────────

    def _build_empty_state(self) -> QWidget:
        page = QWidget()
        heading = QLabel("Pocket Notes")
        heading.setAlignment(Qt.AlignCenter)
        heading.setStyleSheet("font-size: 40px; font-weight: 600;")
        blurb = QLabel(
            "Send and receive messages without keeping your phone online.\n"
            "Use Pocket Notes on up to 4 linked devices and 1 mobile phone."
        )
        blurb.setAlignment(Qt.AlignCenter)
        blurb.setWordWrap(True)
        layout = QVBoxLayout(page)
        layout.addStretch(1)
        layout.addWidget(heading)
        layout.addWidget(blurb)
        layout.addStretch(1)
        return page

    def _build_notes_view(self) -> QWidget:
        page = QWidget()

        self.back_btn = QPushButton("←")
        self.back_btn.setFixedWidth(36)
        self.back_btn.clicked.connect(self.selection.clear)
        self.header_badge = QLabel()
        self.header_name = QLabel()
        self.header_name.setStyleSheet("font-size: 20px; font-weight: 600; color: white;")

        header = QWidget()
        header.setStyleSheet("background: #001F8B;")
        header_layout = QHBoxLayout(header)
        header_layout.addWidget(self.back_btn)
        header_layout.addWidget(self.header_badge)
        header_layout.addWidget(self.header_name, 1)

        self.notes_list = QListWidget()
        self.notes_list.setWordWrap(True)
        self.notes_list.setSelectionMode(QListWidget.NoSelection)
        self.notes_list.setSpacing(6)

        self.note_input = NoteInput()
        self.note_input.setPlaceholderText("Enter your text here...........")
        self.note_input.setFixedHeight(96)
        self.note_input.submitted.connect(self.submit_note)
        self.note_input.textChanged.connect(self._sync_send_enabled)
        self.send_btn = QPushButton("Send")
        self.send_btn.clicked.connect(self.submit_note)

        input_row = QHBoxLayout()
        input_row.addWidget(self.note_input, 1)
        input_row.addWidget(self.send_btn, 0, Qt.AlignBottom)

        layout = QVBoxLayout(page)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(header)
        layout.addWidget(self.notes_list, 1)
        layout.addLayout(input_row)

        self._sync_send_enabled()
        return page

    # ───────────────────────── refresh ─────────────────────────

    def refresh_groups(self) -> None:
        selected = self.selection.selected_group_id
        self.groups_list.clear()
        for group in self.store.list_groups():
            item = QListWidgetItem(QIcon(badge_pixmap(group)), group.name)
            item.setData(GROUP_ID_ROLE, group.id)
            self.groups_list.addItem(item)
            if group.id == selected:
                self.groups_list.setCurrentItem(item)

    def refresh_view(self) -> None:
        group = self.view.current_group
        if not self.selection.has_selection:
            self.groups_list.clearSelection()
            self.pages.setCurrentIndex(0)
        else:
            self.pages.setCurrentIndex(1)
            if group is not None:
                self.header_badge.setPixmap(badge_pixmap(group))
                self.header_name.setText(group.name)
            else:
                self.header_badge.clear()
                self.header_name.clear()
            self._fill_notes()
        self._apply_layout_mode()

    def _fill_notes(self) -> None:
        self.notes_list.clear()
        for note in self.view.current_notes:
            self.notes_list.addItem(f"{note.content}\n\n{note.date} • {note.time}")
        self.notes_list.scrollToBottom()

    def _apply_layout_mode(self) -> None:
        # narrow window: one pane at a time
        if self._mobile:
            selected = self.selection.has_selection
            self.sidebar.setVisible(not selected)
            self.pages.setVisible(selected)
        else:
            self.sidebar.setVisible(True)
            self.pages.setVisible(True)
        self.back_btn.setVisible(self._mobile)

    def _sync_send_enabled(self) -> None:
        self.send_btn.setEnabled(bool(self.note_input.toPlainText().strip()))

    # ───────────────────────── actions ─────────────────────────

    def _on_group_clicked(self, item: QListWidgetItem) -> None:
        self.selection.select(item.data(GROUP_ID_ROLE))

    def _on_store_changed(self, change: StoreChange) -> None:
        if change.kind == "group_created":
            self.refresh_groups()
        elif change.entity.group_id == self.selection.selected_group_id:
            self._fill_notes()
        self._report_write_failure()

    def open_create_group_dialog(self) -> None:
        dlg = CreateGroupDialog(self, self.create_group)
        dlg.exec()

    def create_group(self, name: str, color: str) -> bool:
        try:
            group = self.store.create_group(name, color)
        except DuplicateNameError:
            QMessageBox.warning(self, "Pocket Notes", "Group name already exists!")
            return False
        except PocketNotesError as e:
            log.exception("Failed to create group")
            QMessageBox.critical(self, "Pocket Notes", str(e))
            return False
        return group is not None

    def submit_note(self) -> None:
        group_id = self.selection.selected_group_id
        if group_id is None:
            return
        try:
            note = self.store.add_note(group_id, self.note_input.toPlainText())
        except PocketNotesError as e:
            log.exception("Failed to add note")
            QMessageBox.critical(self, "Pocket Notes", str(e))
            return
        if note is not None:
            self.note_input.clear()

    def report_load_errors(self) -> None:
        errors = self.store.load_errors
        if not errors:
            return
        lines = []
        for err in errors:
            lines.append(str(err))
            if err.recovery_path:
                lines.append(f"  copy kept at: {err.recovery_path}")
        QMessageBox.warning(
            self,
            "Pocket Notes",
            "Some saved data could not be read and was reset:\n\n" + "\n".join(lines),
        )

    def _report_write_failure(self) -> None:
        err = self.services.sync.last_error
        if err is None:
            return
        QMessageBox.critical(self, "Pocket Notes", f"Could not save your data:\n\n{err}")

    # ───────────────────────── Qt events ─────────────────────────

    def resizeEvent(self, event):  # type: ignore[override]
        super().resizeEvent(event)
        mobile = self.width() < MOBILE_BREAKPOINT_PX
        if mobile != self._mobile:
            self._mobile = mobile
            self._apply_layout_mode()
        self._ui_state.schedule_save()

    def moveEvent(self, event):  # type: ignore[override]
        super().moveEvent(event)
        self._ui_state.schedule_save()

    def closeEvent(self, event):  # type: ignore[override]
        try:
            self._ui_state.save()
        except Exception:
            log.exception("Failed to save UI state on close")
        self._unsubscribe()
        self.services.close()
        super().closeEvent(event)
