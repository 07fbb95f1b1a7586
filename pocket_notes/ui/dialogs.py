from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QButtonGroup, QDialog, QFormLayout, QHBoxLayout, QLabel, QLineEdit,
    QPushButton, QVBoxLayout, QWidget,
)

from pocket_notes.settings import DEFAULT_COLOR, GROUP_COLORS

# (name, color) -> True when the group was created and the dialog may close
SubmitCallback = Callable[[str, str], bool]

_SWATCH_QSS = """
QPushButton {{
    background-color: {color};
    border: 2px solid transparent;
    border-radius: 12px;
    min-width: 24px; max-width: 24px;
    min-height: 24px; max-height: 24px;
}}
QPushButton:checked {{ border: 2px solid #000000; }}
"""


class CreateGroupDialog(QDialog):
    """
    "Create New group" popup. Clicking outside closes it and the typed
    name is discarded.
    """

    def __init__(self, parent: QWidget | None, on_submit: SubmitCallback):
        super().__init__(parent)
        self.setWindowFlags(Qt.Popup)
        self.setMinimumWidth(420)
        self._on_submit = on_submit

        title = QLabel("Create New group")
        title.setStyleSheet("font-size: 18px; font-weight: 600;")

        self.name_input = QLineEdit()
        self.name_input.setPlaceholderText("Enter group name")
        self.name_input.returnPressed.connect(self._submit)

        self._colors = QButtonGroup(self)
        self._colors.setExclusive(True)
        swatches = QHBoxLayout()
        swatches.setSpacing(8)
        for color in GROUP_COLORS:
            btn = QPushButton()
            btn.setCheckable(True)
            btn.setToolTip(color)
            btn.setStyleSheet(_SWATCH_QSS.format(color=color))
            btn.setProperty("color", color)
            btn.setChecked(color == DEFAULT_COLOR)
            self._colors.addButton(btn)
            swatches.addWidget(btn)
        swatches.addStretch(1)

        form = QFormLayout()
        form.addRow("Group Name", self.name_input)
        form.addRow("Choose colour", swatches)

        create = QPushButton("Create")
        create.setDefault(True)
        create.clicked.connect(self._submit)

        buttons = QHBoxLayout()
        buttons.addStretch(1)
        buttons.addWidget(create)

        layout = QVBoxLayout(self)
        layout.addWidget(title)
        layout.addLayout(form)
        layout.addLayout(buttons)

        self.name_input.setFocus()

    def selected_color(self) -> str:
        btn = self._colors.checkedButton()
        return btn.property("color") if btn is not None else DEFAULT_COLOR

    def _submit(self) -> None:
        name = self.name_input.text()
        if not name.strip():
            return
        if self._on_submit(name, self.selected_color()):
            self.accept()
