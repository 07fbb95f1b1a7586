from __future__ import annotations

from pocket_notes.core.models import Group, Note
from pocket_notes.core.store import EntityStore
from .selection import SelectionController


class ViewProjection:
    """Read-only view of the selected group and its notes, recomputed on every read."""

    def __init__(self, store: EntityStore, selection: SelectionController) -> None:
        self._store = store
        self._selection = selection

    @property
    def current_group(self) -> Group | None:
        return self._store.get_group(self._selection.selected_group_id)

    @property
    def current_notes(self) -> tuple[Note, ...]:
        return self._store.list_notes_for(self._selection.selected_group_id)
