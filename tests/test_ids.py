import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from datetime import datetime

from pocket_notes.core.ids import IdGenerator, format_date, format_time


def test_format_date():
    assert format_date(datetime(2026, 10, 17, 9, 5)) == "17 Oct 2026"
    assert format_date(datetime(2024, 1, 3)) == "3 Jan 2024"


def test_format_time():
    assert format_time(datetime(2026, 10, 17, 15, 5)) == "3:05 PM"
    assert format_time(datetime(2026, 10, 17, 0, 30)) == "12:30 AM"
    assert format_time(datetime(2026, 10, 17, 12, 0)) == "12:00 PM"
    assert format_time(datetime(2026, 10, 17, 9, 41)) == "9:41 AM"


def test_ids_are_wall_clock_millis():
    instant = datetime(2026, 10, 17, 9, 5)
    gen = IdGenerator(clock=lambda: instant)
    assert gen.new_id() == str(int(instant.timestamp() * 1000))


def test_same_tick_ids_do_not_collide():
    instant = datetime(2026, 10, 17, 9, 5)
    gen = IdGenerator(clock=lambda: instant)
    ids = [gen.new_id() for _ in range(100)]
    assert len(set(ids)) == 100
    assert [int(i) for i in ids] == sorted(int(i) for i in ids)


def test_clock_going_backwards_still_increases():
    times = iter([datetime(2026, 10, 17, 9, 5), datetime(2026, 10, 17, 9, 0)])
    gen = IdGenerator(clock=lambda: next(times))
    first = gen.new_id()
    second = gen.new_id()
    assert int(second) == int(first) + 1


def test_observe_skips_persisted_ids():
    instant = datetime(2026, 10, 17, 9, 5)
    gen = IdGenerator(clock=lambda: instant)
    future = str(int(instant.timestamp() * 1000) + 50)
    gen.observe(["not-a-number", future])
    assert int(gen.new_id()) == int(future) + 1
