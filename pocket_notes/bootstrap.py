from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pocket_notes.core.store import EntityStore
from pocket_notes.services.persistence import PersistenceSync
from pocket_notes.services.selection import SelectionController
from pocket_notes.services.view import ViewProjection
from pocket_notes.storage.kv import KeyValueStorage


@dataclass
class Services:
    store: EntityStore
    sync: PersistenceSync
    selection: SelectionController
    view: ViewProjection

    def close(self) -> None:
        self.store.close()


def build_services(
    storage: KeyValueStorage,
    *,
    recovery_dir: Path | None = None,
    strict_group_refs: bool = False,
) -> Services:
    sync = PersistenceSync(storage, recovery_dir=recovery_dir)
    store = EntityStore.open(sync, strict_group_refs=strict_group_refs)
    selection = SelectionController()
    return Services(
        store=store,
        sync=sync,
        selection=selection,
        view=ViewProjection(store, selection),
    )
