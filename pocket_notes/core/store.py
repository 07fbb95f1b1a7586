from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from pocket_notes.settings import DEFAULT_COLOR
from .errors import CorruptStateError, DuplicateNameError, StoreClosedError, UnknownGroupError
from .ids import IdGenerator, format_date, format_time
from .models import Group, Note
from .naming import clean_name, initials_for, name_key, normalize_color

if TYPE_CHECKING:
    from pocket_notes.services.persistence import PersistenceSync

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreChange:
    kind: Literal["group_created", "note_added"]
    entity: Group | Note


Listener = Callable[[StoreChange], None]


class EntityStore:
    """
    In-memory owner of the Group and Note collections.

    Every committed mutation is written through to ``sync`` (when given)
    and then announced to subscribers, exactly once and in mutation order.
    """

    def __init__(
        self,
        *,
        sync: "PersistenceSync | None" = None,
        ids: IdGenerator | None = None,
        groups: list[Group] | None = None,
        notes: list[Note] | None = None,
        strict_group_refs: bool = False,
    ) -> None:
        self._sync = sync
        self._ids = ids or IdGenerator()
        self._groups: list[Group] = list(groups or [])
        self._notes: list[Note] = list(notes or [])
        self._by_id: dict[str, Group] = {g.id: g for g in self._groups}
        self._name_keys: set[str] = {name_key(g.name) for g in self._groups}
        self._listeners: list[Listener] = []
        self._closed = False
        self.strict_group_refs = strict_group_refs
        self.load_errors: list[CorruptStateError] = []

        self._ids.observe(g.id for g in self._groups)
        self._ids.observe(n.id for n in self._notes)

    @classmethod
    def open(
        cls,
        sync: "PersistenceSync",
        *,
        ids: IdGenerator | None = None,
        strict_group_refs: bool = False,
    ) -> "EntityStore":
        """Load durable state through ``sync`` and return a live store."""
        loaded = sync.load()
        store = cls(
            sync=sync,
            ids=ids,
            groups=loaded.groups,
            notes=loaded.notes,
            strict_group_refs=strict_group_refs,
        )
        store.load_errors = list(loaded.errors)
        return store

    # ───────────────────────── lifecycle ─────────────────────────

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._listeners.clear()
        log.info("Store closed: groups=%d notes=%d", len(self._groups), len(self._notes))

    def __enter__(self) -> "EntityStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreClosedError("store is closed")

    # ───────────────────────── subscriptions ─────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    def _commit(self, change: StoreChange) -> None:
        if self._sync is not None:
            if change.kind == "group_created":
                self._sync.save_groups(self._groups)
            else:
                self._sync.save_notes(self._notes)
        for listener in list(self._listeners):
            listener(change)

    # ───────────────────────── mutations ─────────────────────────

    def create_group(self, name: str, color: str | None = DEFAULT_COLOR) -> Group | None:
        """
        Append a new group.

        Returns None (and changes nothing) for a blank name.
        Raises DuplicateNameError when a group with the same name exists,
        ignoring case and surrounding whitespace.
        """
        self._ensure_open()
        cleaned = clean_name(name)
        if not cleaned:
            return None

        key = name_key(cleaned)
        if key in self._name_keys:
            log.info("Duplicate group name rejected: %r", cleaned)
            raise DuplicateNameError(cleaned)

        color = normalize_color(color)
        group = Group(
            id=self._ids.new_id(),
            name=cleaned,
            color=color,
            initials=initials_for(cleaned),
        )
        self._groups.append(group)
        self._by_id[group.id] = group
        self._name_keys.add(key)
        log.info("Group created: id=%s name=%r", group.id, group.name)

        self._commit(StoreChange("group_created", group))
        return group

    def add_note(self, group_id: str, content: str) -> Note | None:
        """
        Append a note to the tail of the global note list.

        Blank content is ignored and None returned. The group id is not
        checked unless ``strict_group_refs`` is set.
        """
        self._ensure_open()
        if not content or not content.strip():
            return None

        if self.strict_group_refs and group_id not in self._by_id:
            raise UnknownGroupError(group_id)

        instant = self._ids.now()
        note = Note(
            id=self._ids.new_id(),
            group_id=group_id,
            content=content,
            date=format_date(instant),
            time=format_time(instant),
            created_at=instant,
        )
        self._notes.append(note)
        log.debug("Note added: id=%s group=%s len=%d", note.id, group_id, len(content))

        self._commit(StoreChange("note_added", note))
        return note

    # ───────────────────────── queries ─────────────────────────

    def list_groups(self) -> tuple[Group, ...]:
        return tuple(self._groups)

    def list_notes(self) -> tuple[Note, ...]:
        return tuple(self._notes)

    def list_notes_for(self, group_id: str | None) -> tuple[Note, ...]:
        if group_id is None:
            return ()
        return tuple(n for n in self._notes if n.group_id == group_id)

    def get_group(self, group_id: str | None) -> Group | None:
        if group_id is None:
            return None
        return self._by_id.get(group_id)

    def orphan_notes(self) -> tuple[Note, ...]:
        return tuple(n for n in self._notes if n.group_id not in self._by_id)
