from .core.errors import (
    CorruptStateError,
    DuplicateNameError,
    PocketNotesError,
    StoreClosedError,
    UnknownColorError,
    UnknownGroupError,
)
from .core.models import Group, Note
from .core.store import EntityStore, StoreChange
from .services.persistence import LoadResult, PersistenceSync
from .services.selection import SelectionController
from .services.view import ViewProjection

__all__ = ["Group",
           "Note",
           "EntityStore",
           "StoreChange",
           "PersistenceSync",
           "LoadResult",
           "SelectionController",
           "ViewProjection",
           "PocketNotesError",
           "DuplicateNameError",
           "UnknownColorError",
           "UnknownGroupError",
           "StoreClosedError",
           "CorruptStateError",
           ]
