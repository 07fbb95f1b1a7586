from __future__ import annotations

from collections.abc import Callable

SelectionListener = Callable[[str | None], None]


class SelectionController:
    """
    Tracks which group is active.

    Two states: nothing selected (``selected_group_id is None``) or a
    group selected. Knows nothing about the store; an id that matches no
    group is accepted as is.
    """

    def __init__(self) -> None:
        self._selected: str | None = None
        self._listeners: list[SelectionListener] = []

    @property
    def selected_group_id(self) -> str | None:
        return self._selected

    @property
    def has_selection(self) -> bool:
        return self._selected is not None

    def subscribe(self, listener: SelectionListener) -> None:
        self._listeners.append(listener)

    def select(self, group_id: str) -> None:
        """Select ``group_id`` as given; checking it is up to the caller."""
        self._set(group_id)

    def clear(self) -> None:
        self._set(None)

    def _set(self, group_id: str | None) -> None:
        if group_id == self._selected:
            return
        self._selected = group_id
        for listener in list(self._listeners):
            listener(group_id)
