import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from datetime import datetime

import pytest

from pocket_notes.core.errors import (
    DuplicateNameError,
    StoreClosedError,
    UnknownColorError,
    UnknownGroupError,
)
from pocket_notes.core.ids import IdGenerator
from pocket_notes.core.store import EntityStore
from pocket_notes.services.persistence import PersistenceSync
from pocket_notes.storage.kv import MemoryStorage


def make_store(**kwargs) -> EntityStore:
    instant = datetime(2026, 10, 17, 15, 5)
    return EntityStore(ids=IdGenerator(clock=lambda: instant), **kwargs)


def test_family_scenario():
    store = make_store()
    family = store.create_group("Family", "#B38BFA")
    assert family.initials == "F"
    assert family.color == "#B38BFA"

    note = store.add_note(family.id, "Dinner at 7")
    assert [n.content for n in store.list_notes_for(family.id)] == ["Dinner at 7"]
    assert note.date == "17 Oct 2026"
    assert note.time == "3:05 PM"

    with pytest.raises(DuplicateNameError):
        store.create_group("family", "#FF79F2")
    assert len(store.list_groups()) == 1


def test_initials_scenario():
    store = make_store()
    assert store.create_group("Mom Dad").initials == "MD"
    assert store.create_group("Work").initials == "W"


def test_duplicate_upper_case_rejected():
    store = make_store()
    store.create_group("Groceries", "#43E6FC")
    with pytest.raises(DuplicateNameError):
        store.create_group("GROCERIES", "#0047FF")


def test_duplicate_with_surrounding_whitespace_rejected():
    store = make_store()
    store.create_group("Work")
    with pytest.raises(DuplicateNameError):
        store.create_group("  work ")


def test_create_group_appends_in_order():
    store = make_store()
    a = store.create_group("A")
    b = store.create_group("B")
    c = store.create_group(" C ")
    assert store.list_groups() == (a, b, c)
    assert c.name == "C"
    assert store.list_groups().count(c) == 1


def test_blank_name_is_noop():
    store = make_store()
    seen = []
    store.subscribe(seen.append)
    assert store.create_group("   ") is None
    assert store.create_group("") is None
    assert store.list_groups() == ()
    assert seen == []


def test_unknown_color_leaves_state_unchanged():
    store = make_store()
    with pytest.raises(UnknownColorError):
        store.create_group("Work", "#000000")
    assert store.list_groups() == ()
    assert store.create_group("Work").color == "#B38BFA"


@pytest.mark.parametrize("content", ["", " ", "\n\t  \n"])
def test_blank_note_is_noop(content):
    store = make_store()
    g = store.create_group("Work")
    groups_before = store.list_groups()
    assert store.add_note(g.id, content) is None
    assert store.list_groups() == groups_before
    assert store.list_notes() == ()


def test_note_content_kept_as_typed():
    store = make_store()
    g = store.create_group("Work")
    note = store.add_note(g.id, "  line one\nline two  ")
    assert note.content == "  line one\nline two  "


def test_notes_for_group_keep_insertion_order():
    store = make_store()
    a = store.create_group("A")
    b = store.create_group("B")
    store.add_note(a.id, "a1")
    store.add_note(b.id, "b1")
    store.add_note(a.id, "a2")
    store.add_note(b.id, "b2")
    store.add_note(a.id, "a3")

    assert [n.content for n in store.list_notes_for(a.id)] == ["a1", "a2", "a3"]
    assert [n.content for n in store.list_notes_for(b.id)] == ["b1", "b2"]
    assert [n.content for n in store.list_notes()] == ["a1", "b1", "a2", "b2", "a3"]


def test_ids_unique_across_entities_in_same_tick():
    store = make_store()
    g = store.create_group("A")
    n1 = store.add_note(g.id, "x")
    n2 = store.add_note(g.id, "y")
    assert len({g.id, n1.id, n2.id}) == 3


def test_permissive_group_refs_by_default():
    store = make_store()
    note = store.add_note("missing", "orphan")
    assert note is not None
    assert store.list_notes_for("missing") == (note,)
    assert store.orphan_notes() == (note,)


def test_strict_group_refs():
    store = make_store(strict_group_refs=True)
    with pytest.raises(UnknownGroupError):
        store.add_note("missing", "orphan")
    assert store.list_notes() == ()


def test_listeners_notified_once_per_mutation_in_order():
    store = make_store()
    seen = []
    store.subscribe(lambda ch: seen.append((ch.kind, ch.entity.id)))
    g = store.create_group("A")
    n = store.add_note(g.id, "hello")
    store.add_note(g.id, "")
    with pytest.raises(DuplicateNameError):
        store.create_group("a")
    assert seen == [("group_created", g.id), ("note_added", n.id)]


def test_unsubscribe():
    store = make_store()
    seen = []
    unsubscribe = store.subscribe(seen.append)
    unsubscribe()
    unsubscribe()
    store.create_group("A")
    assert seen == []


def test_write_through_happens_before_listeners():
    storage = MemoryStorage()
    store = make_store(sync=PersistenceSync(storage))
    payloads = []
    store.subscribe(lambda ch: payloads.append(storage.get("pocketGroups")))
    store.create_group("Work")
    assert payloads and '"Work"' in payloads[0]


def test_closed_store_rejects_mutations():
    with make_store() as store:
        g = store.create_group("A")
    assert store.closed
    with pytest.raises(StoreClosedError):
        store.create_group("B")
    with pytest.raises(StoreClosedError):
        store.add_note(g.id, "x")
    assert store.list_groups() == (g,)


def test_open_loads_and_seeds_ids():
    storage = MemoryStorage()
    instant = datetime(2026, 10, 17, 15, 5)
    first = EntityStore.open(PersistenceSync(storage), ids=IdGenerator(clock=lambda: instant))
    g = first.create_group("Work")
    first.close()

    second = EntityStore.open(PersistenceSync(storage), ids=IdGenerator(clock=lambda: instant))
    assert second.list_groups() == (g,)
    n = second.add_note(g.id, "after restart")
    assert n.id != g.id
    with pytest.raises(DuplicateNameError):
        second.create_group("WORK")
