from __future__ import annotations

import os
import uuid
from datetime import datetime
from pathlib import Path

from pocket_notes.settings import RECOVERY_DIR


def atomic_write_text(
    path: Path,
    text: str,
    *,
    encoding: str = "utf-8",
) -> None:
    """
    Atomic-ish file write:
    - write to temp file in same directory
    - fsync
    - replace()

    A crash leaves either the old payload or the new one, never half of it.
    """
    path = Path(path)
    parent = path.parent
    parent.mkdir(parents=True, exist_ok=True)

    tmp_path = parent / f".{path.name}.tmp-{uuid.uuid4().hex}"

    try:
        with open(tmp_path, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    finally:
        if tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                pass


def write_recovery_copy(
    key: str,
    payload: str,
    *,
    reason: str = "recovery",
    recovery_dir: Path | None = None,
) -> Path:
    """
    Keep a timestamped copy of a slot payload that could not be used:
      <recovery_dir>/<key>.<reason>.<YYYYmmdd-HHMMSS-ffffff>.json
    """
    target_dir = Path(recovery_dir) if recovery_dir is not None else RECOVERY_DIR
    ts = datetime.now().strftime("%Y%m%d-%H%M%S-%f")
    path = target_dir / f"{key}.{reason}.{ts}.json"
    atomic_write_text(path, payload)
    return path
