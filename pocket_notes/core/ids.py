from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime

Clock = Callable[[], datetime]

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_date(instant: datetime) -> str:
    """Day, short month, year: ``17 Oct 2026``."""
    return f"{instant.day} {_MONTHS[instant.month - 1]} {instant.year}"


def format_time(instant: datetime) -> str:
    """12-hour clock with period: ``3:05 PM``."""
    hour = instant.hour % 12 or 12
    period = "AM" if instant.hour < 12 else "PM"
    return f"{hour}:{instant.minute:02d} {period}"


class IdGenerator:
    """
    Issues ids derived from wall-clock milliseconds.

    Ids are strictly increasing within the process: if the clock has not
    moved past the last issued value (same tick, or clock set backwards),
    the next id is ``last + 1``.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or datetime.now
        self._last = 0

    def now(self) -> datetime:
        return self._clock()

    def observe(self, ids: Iterable[str]) -> None:
        """Never issue an id at or below any of ``ids`` (numeric ones only)."""
        for raw in ids:
            try:
                value = int(raw)
            except (TypeError, ValueError):
                continue
            if value > self._last:
                self._last = value

    def new_id(self) -> str:
        stamp = int(self._clock().timestamp() * 1000)
        if stamp <= self._last:
            stamp = self._last + 1
        self._last = stamp
        return str(stamp)
