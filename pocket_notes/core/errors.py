from __future__ import annotations


class PocketNotesError(Exception):
    """Base class for every error raised by the store and its collaborators."""


class DuplicateNameError(PocketNotesError):
    def __init__(self, name: str):
        super().__init__(f"Group name already exists: {name!r}")
        self.name = name


class UnknownColorError(PocketNotesError, ValueError):
    def __init__(self, color: str):
        super().__init__(f"Color is not in the palette: {color!r}")
        self.color = color


class UnknownGroupError(PocketNotesError):
    def __init__(self, group_id: str):
        super().__init__(f"No group with id {group_id!r}")
        self.group_id = group_id


class StoreClosedError(PocketNotesError):
    pass


class CorruptStateError(PocketNotesError):
    """
    Durable payload of a slot could not be parsed.

    Reported, never raised out of the startup load: the slot falls back
    to an empty collection.
    """

    def __init__(self, key: str, reason: str, *, recovery_path=None):
        super().__init__(f"Corrupt payload in slot {key!r}: {reason}")
        self.key = key
        self.reason = reason
        self.recovery_path = recovery_path
