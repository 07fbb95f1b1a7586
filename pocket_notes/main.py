from __future__ import annotations

import argparse
from pathlib import Path

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QApplication

from pocket_notes.bootstrap import build_services
from pocket_notes.logging_setup import SESSION_ID, install_global_exception_hooks, log
from pocket_notes.settings import APP_NAME, DATA_DIR, RECOVERY_DIR
from pocket_notes.storage.kv import JsonFileStorage, KeyValueStorage
from pocket_notes.storage.qsettings import QSettingsStorage
from pocket_notes.ui.main_window import PocketNotesWindow


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Pocket Notes: grouped, timestamped notes")
    p.add_argument(
        "--data-dir",
        type=Path,
        default=DATA_DIR,
        help="Folder for the json storage backend",
    )
    p.add_argument(
        "--storage",
        choices=("json", "qsettings"),
        default="json",
        help="Where groups and notes are kept",
    )
    p.add_argument(
        "--strict-groups",
        action="store_true",
        help="Reject notes whose group does not exist",
    )
    return p.parse_args(argv)


def make_storage(args: argparse.Namespace, settings: QSettings) -> KeyValueStorage:
    if args.storage == "qsettings":
        return QSettingsStorage(settings)
    storage = JsonFileStorage(args.data_dir)
    storage.ensure()
    return storage


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    install_global_exception_hooks()

    app = QApplication([])
    settings = QSettings(APP_NAME, APP_NAME)
    storage = make_storage(args, settings)
    services = build_services(
        storage,
        recovery_dir=RECOVERY_DIR,
        strict_group_refs=args.strict_groups,
    )

    win = PocketNotesWindow(services, settings=settings)
    win.show()
    win.report_load_errors()
    log.info("App started, storage=%s, SID=%s", args.storage, SESSION_ID)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
