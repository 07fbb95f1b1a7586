from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, TypeVar

from pocket_notes.core.errors import CorruptStateError
from pocket_notes.core.models import Group, Note
from pocket_notes.core.naming import normalize_color
from pocket_notes.settings import GROUPS_KEY, NOTES_KEY
from pocket_notes.storage.filesystem import write_recovery_copy
from pocket_notes.storage.kv import KeyValueStorage

log = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class LoadResult:
    groups: list[Group] = field(default_factory=list)
    notes: list[Note] = field(default_factory=list)
    errors: list[CorruptStateError] = field(default_factory=list)


def _group_from_record(record) -> Group:
    group = Group.from_record(record)
    # raises UnknownColorError (a ValueError) for colors outside the palette
    normalize_color(group.color)
    return group


class PersistenceSync:
    """
    Write-through / read-back bridge between the entity store and a
    key-value storage backend.

    Groups and notes live in two independent slots. They are written one
    after the other, never atomically together: a crash between the two
    writes can leave notes referring to a group that was not saved.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        groups_key: str = GROUPS_KEY,
        notes_key: str = NOTES_KEY,
        recovery_dir: Path | None = None,
    ) -> None:
        self.storage = storage
        self.groups_key = groups_key
        self.notes_key = notes_key
        self.recovery_dir = recovery_dir
        self.last_error: Exception | None = None

    # ───────────────────────── load ─────────────────────────

    def load(self) -> LoadResult:
        result = LoadResult()
        result.groups = self._load_slot(self.groups_key, _group_from_record, result.errors)
        result.notes = self._load_slot(self.notes_key, Note.from_record, result.errors)
        log.info(
            "State loaded: groups=%d notes=%d corrupt_slots=%d",
            len(result.groups), len(result.notes), len(result.errors),
        )
        return result

    def _load_slot(
        self,
        key: str,
        parse: Callable[[object], T],
        errors: list[CorruptStateError],
    ) -> list[T]:
        try:
            raw = self.storage.get(key)
        except (OSError, UnicodeDecodeError) as e:
            log.exception("Failed to read slot %s", key)
            errors.append(CorruptStateError(key, f"unreadable: {e}"))
            return []

        if raw is None:
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError(f"expected an array, got {type(data).__name__}")
            return [parse(item) for item in data]
        except (ValueError, TypeError, KeyError, RecursionError) as e:
            err = CorruptStateError(key, f"{type(e).__name__}: {e}")
            try:
                err.recovery_path = write_recovery_copy(
                    key, raw, reason="corrupt", recovery_dir=self.recovery_dir
                )
            except OSError:
                log.exception("Failed to keep a copy of corrupt slot %s", key)
            log.warning("%s; starting with an empty collection (copy: %s)", err, err.recovery_path)
            errors.append(err)
            return []

    # ───────────────────────── save ─────────────────────────

    def save_groups(self, groups: Iterable[Group]) -> bool:
        return self._save_slot(self.groups_key, [g.to_record() for g in groups])

    def save_notes(self, notes: Iterable[Note]) -> bool:
        return self._save_slot(self.notes_key, [n.to_record() for n in notes])

    def _save_slot(self, key: str, records: list[dict]) -> bool:
        payload = json.dumps(records, ensure_ascii=False)
        try:
            self.storage.set(key, payload)
        except OSError as e:
            log.exception("Write-through failed: slot=%s records=%d", key, len(records))
            self.last_error = e
            try:
                rec_path = write_recovery_copy(key, payload, recovery_dir=self.recovery_dir)
                log.critical("Recovery copy written: %s", rec_path)
            except OSError:
                log.exception("Failed to write recovery copy")
            return False

        self.last_error = None
        log.debug("Slot saved: %s records=%d", key, len(records))
        return True
