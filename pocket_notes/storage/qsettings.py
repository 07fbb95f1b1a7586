from __future__ import annotations

from PySide6.QtCore import QSettings

from pocket_notes.settings import SettingsKeys
from .kv import KeyValueStorage


class QSettingsStorage(KeyValueStorage):
    """
    Slots kept in QSettings under the ``storage/`` group.
    QSettings picks the platform location (registry, plist, ini).
    """

    def __init__(self, settings: QSettings, *, group: str = SettingsKeys.STORAGE_GROUP) -> None:
        self._settings = settings
        self._group = group

    def _key(self, key: str) -> str:
        return f"{self._group}/{key}"

    def get(self, key: str) -> str | None:
        val = self._settings.value(self._key(key))
        if val is None:
            return None
        return str(val)

    def set(self, key: str, value: str) -> None:
        self._settings.setValue(self._key(key), value)
        # flush now: a slot write must be durable before the caller continues
        self._settings.sync()
        if self._settings.status() != QSettings.Status.NoError:
            raise OSError(f"QSettings write failed for {key!r}: {self._settings.status()}")
