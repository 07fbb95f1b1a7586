import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from pocket_notes.storage.filesystem import atomic_write_text, write_recovery_copy
from pocket_notes.storage.kv import JsonFileStorage, MemoryStorage


def test_memory_storage():
    storage = MemoryStorage({"a": "1"})
    assert storage.get("a") == "1"
    assert storage.get("b") is None
    storage.set("b", "2")
    assert storage.slots == {"a": "1", "b": "2"}


def test_json_file_storage(tmp_path):
    storage = JsonFileStorage(tmp_path / "nested" / "data")
    assert storage.get("pocketGroups") is None
    storage.set("pocketGroups", '[{"name": "Семья"}]')
    assert storage.get("pocketGroups") == '[{"name": "Семья"}]'
    assert storage.slot_path("pocketGroups") == tmp_path / "nested" / "data" / "pocketGroups.json"


def test_atomic_write_leaves_no_temp_files(tmp_path):
    target = tmp_path / "slot.json"
    atomic_write_text(target, "one")
    atomic_write_text(target, "two")
    assert target.read_text(encoding="utf-8") == "two"
    assert [p.name for p in tmp_path.iterdir()] == ["slot.json"]


def test_recovery_copy(tmp_path):
    path = write_recovery_copy("pocketNotes", "[broken", reason="corrupt", recovery_dir=tmp_path)
    assert path.parent == tmp_path
    assert path.name.startswith("pocketNotes.corrupt.")
    assert path.read_text(encoding="utf-8") == "[broken"


def test_qsettings_storage(tmp_path):
    QtCore = pytest.importorskip("PySide6.QtCore")
    from pocket_notes.storage.qsettings import QSettingsStorage

    ini = str(tmp_path / "pocket.ini")
    storage = QSettingsStorage(QtCore.QSettings(ini, QtCore.QSettings.IniFormat))
    assert storage.get("pocketGroups") is None
    storage.set("pocketGroups", '[{"id": "1", "name": "Work, Home"}]')

    reopened = QSettingsStorage(QtCore.QSettings(ini, QtCore.QSettings.IniFormat))
    assert reopened.get("pocketGroups") == '[{"id": "1", "name": "Work, Home"}]'
