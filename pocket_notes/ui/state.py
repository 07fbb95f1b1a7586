import logging

from PySide6.QtCore import QSettings, QTimer
from PySide6.QtWidgets import QMainWindow

from pocket_notes.settings import SettingsKeys


log = logging.getLogger(__name__)


class UiStateStore:
    """
    Saves / restores window geometry in QSettings.
    Saves are debounced so a drag-resize writes once.
    """
    def __init__(self, *, owner: QMainWindow, settings: QSettings, debounce_ms: int = 400):
        self._owner = owner
        self._settings = settings
        self._restoring = False
        self._timer = QTimer(owner)
        self._timer.setSingleShot(True)
        self._timer.setInterval(int(debounce_ms))
        self._timer.timeout.connect(self.save)

    def schedule_save(self) -> None:
        if self._restoring:
            return
        self._timer.start()

    def restore(self, *, default_size: tuple[int, int] = (1100, 700)) -> None:
        self._restoring = True
        try:
            geo = self._settings.value(SettingsKeys.UI_GEOMETRY)
            if geo:
                self._owner.restoreGeometry(geo)
            else:
                self._owner.resize(*default_size)
        finally:
            self._restoring = False

    def save(self) -> None:
        self._settings.setValue(SettingsKeys.UI_GEOMETRY, self._owner.saveGeometry())
