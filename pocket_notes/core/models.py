from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


def _require_str(record: dict, field: str, *, allow_empty: bool = False) -> str:
    value = record[field]
    if not isinstance(value, str):
        raise TypeError(f"{field} must be a string, got {type(value).__name__}")
    if not allow_empty and not value.strip():
        raise ValueError(f"{field} must not be empty")
    return value


@dataclass(frozen=True)
class Group:
    id: str
    name: str
    color: str
    initials: str

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "initials": self.initials,
        }

    @classmethod
    def from_record(cls, record: Any) -> "Group":
        """
        Build a Group from its stored record.
        Raises KeyError / TypeError / ValueError on malformed input.
        """
        if not isinstance(record, dict):
            raise TypeError(f"group record must be an object, got {type(record).__name__}")
        return cls(
            id=_require_str(record, "id"),
            name=_require_str(record, "name"),
            color=_require_str(record, "color"),
            initials=_require_str(record, "initials", allow_empty=True),
        )


@dataclass(frozen=True)
class Note:
    id: str
    group_id: str
    content: str
    date: str
    time: str
    created_at: datetime | None = None

    def to_record(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "groupId": self.group_id,
            "content": self.content,
            "date": self.date,
            "time": self.time,
        }
        if self.created_at is not None:
            out["createdAt"] = self.created_at.isoformat()
        return out

    @classmethod
    def from_record(cls, record: Any) -> "Note":
        if not isinstance(record, dict):
            raise TypeError(f"note record must be an object, got {type(record).__name__}")

        created_at = None
        raw_ts = record.get("createdAt")
        if raw_ts is not None:
            if not isinstance(raw_ts, str):
                raise TypeError("createdAt must be an ISO-8601 string")
            created_at = datetime.fromisoformat(raw_ts)

        return cls(
            id=_require_str(record, "id"),
            group_id=_require_str(record, "groupId", allow_empty=True),
            content=_require_str(record, "content"),
            date=_require_str(record, "date", allow_empty=True),
            time=_require_str(record, "time", allow_empty=True),
            created_at=created_at,
        )
