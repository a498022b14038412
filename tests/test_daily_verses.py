"""Daily verse scheduling: buffer, fairness, idempotency and reads."""

from __future__ import annotations

import math
import random
from collections import Counter
from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from models import DailyVersePoolEntry, ScheduleBatch, ScheduledDay
from utils.daily_verses import (
    DailyVerseScheduler,
    add_months,
    get_daily_verse,
    get_daily_verses_between,
    get_scheduled_range,
    month_bounds,
)
from utils.errors import SchedulingConflictError
from utils.verse_range import VerseRange

NOW = datetime(2026, 10, 18, 6, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


def add_pool(session_factory, count, publish_date=None, last_scheduled_at=None):
    session = session_factory()
    entries = [
        DailyVersePoolEntry(
            start_book="genesis", start_chapter=1, start_verse=(i % 5) + 1,
            end_book="genesis", end_chapter=1, end_verse=(i % 5) + 1,
            publish_date=publish_date,
            last_scheduled_at=last_scheduled_at,
            schedule_count=0,
        )
        for i in range(count)
    ]
    session.add_all(entries)
    session.commit()
    ids = [e.id for e in entries]
    session.close()
    return ids


def scheduled(session_factory):
    session = session_factory()
    try:
        return {row.date: row.pool_entry_id for row in session.query(ScheduledDay).all()}
    finally:
        session.close()


def make_scheduler(session_factory, seed=1234, window=90):
    return DailyVerseScheduler(
        session_factory=session_factory,
        rng=random.Random(seed),
        clock=lambda: NOW,
        window=window,
    )


def test_month_helpers() -> None:
    assert add_months(2026, 11, 1) == (2026, 12)
    assert add_months(2026, 11, 2) == (2027, 1)
    assert add_months(2026, 1, -1) == (2025, 12)
    assert month_bounds(2028, 2) == (date(2028, 2, 1), date(2028, 2, 29))


def test_buffer_on_empty_schedule_covers_next_two_months(seeded) -> None:
    pool_ids = set(add_pool(seeded, 10))
    targets = make_scheduler(seeded).ensure_buffer(today=TODAY)

    assert targets == [(2026, 11), (2026, 12)]
    rows = scheduled(seeded)
    expected_days = {date(2026, 11, 1) + timedelta(days=i) for i in range(61)}
    assert set(rows) == expected_days
    assert len(rows) == 61
    assert set(rows.values()) <= pool_ids


def test_buffer_only_grows_by_the_missing_month(seeded) -> None:
    add_pool(seeded, 10)
    scheduler = make_scheduler(seeded)
    scheduler.ensure_buffer(today=TODAY)

    assert scheduler.ensure_buffer(today=TODAY) == []
    assert scheduler.ensure_buffer(today=date(2026, 11, 2)) == [(2027, 1)]
    assert len(scheduled(seeded)) == 61 + 31


def test_fairness_bound_with_large_pool(seeded) -> None:
    pool_size = 120
    add_pool(seeded, pool_size)
    days = make_scheduler(seeded, seed=7).schedule_month(2026, 12)

    assert days == 31
    counts = Counter(scheduled(seeded).values())
    assert max(counts.values()) <= math.ceil(31 / pool_size) + 1
    # At least 90 never-used entries stay in the window for the whole month
    assert len(counts) == 31


def test_entries_picked_this_month_count_as_recent(seeded) -> None:
    """With a window of one, two entries alternate day by day."""
    first, second = add_pool(seeded, 2)
    make_scheduler(seeded, window=1).schedule_month(2026, 11)

    rows = scheduled(seeded)
    assert [rows[date(2026, 11, d)] for d in range(1, 5)] == [first, second, first, second]
    assert sorted(Counter(rows.values()).values()) == [15, 15]

    session = seeded()
    for entry in session.query(DailyVersePoolEntry):
        assert entry.schedule_count == 15
        assert entry.last_scheduled_at.replace(tzinfo=None) == NOW.replace(tzinfo=None)
    session.close()


def test_select_entry_only_considers_the_oldest_window() -> None:
    never = SimpleNamespace(id=1, last_scheduled_at=None)
    old = SimpleNamespace(id=2, last_scheduled_at=datetime(2020, 1, 1))
    recent = SimpleNamespace(id=3, last_scheduled_at=datetime(2026, 1, 1, tzinfo=timezone.utc))
    scheduler = DailyVerseScheduler(rng=random.Random(3), window=2)

    picks = {scheduler.select_entry([recent, old, never]).id for _ in range(50)}
    assert picks == {1, 2}


def test_pinned_entries_win_their_day(seeded) -> None:
    add_pool(seeded, 5)
    pinned_id = add_pool(seeded, 1, publish_date="12-25")[0]
    make_scheduler(seeded).schedule_month(2026, 12)

    assert scheduled(seeded)[date(2026, 12, 25)] == pinned_id


def test_rerun_of_a_scheduled_month_is_a_no_op(seeded) -> None:
    add_pool(seeded, 5)
    scheduler = make_scheduler(seeded)
    assert scheduler.schedule_month(2026, 11) == 30
    before = scheduled(seeded)

    assert scheduler.schedule_month(2026, 11) == 0
    assert scheduled(seeded) == before


def test_date_collision_raises_and_rolls_back(seeded) -> None:
    entry_id = add_pool(seeded, 5)[0]
    session = seeded()
    session.add(ScheduledDay(date=date(2026, 11, 5), pool_entry_id=entry_id))
    session.commit()
    session.close()

    with pytest.raises(SchedulingConflictError):
        make_scheduler(seeded).schedule_month(2026, 11)

    assert list(scheduled(seeded)) == [date(2026, 11, 5)]
    session = seeded()
    assert session.query(ScheduleBatch).count() == 0
    assert all(e.schedule_count == 0 for e in session.query(DailyVersePoolEntry))
    session.close()


def test_empty_pool_schedules_nothing(seeded) -> None:
    scheduler = make_scheduler(seeded)
    assert scheduler.schedule_month(2026, 11) == 0
    assert scheduled(seeded) == {}
    assert not scheduler.has_scheduled_days(2026, 11)
    assert scheduler.ensure_buffer(today=TODAY) == []


def test_buffer_reports_only_months_with_written_days(seeded) -> None:
    """A month already claimed by another run is not reported as scheduled."""
    add_pool(seeded, 5)
    session = seeded()
    session.add(ScheduleBatch(year=2026, month=11))
    session.commit()
    session.close()

    assert make_scheduler(seeded).ensure_buffer(today=TODAY) == [(2026, 12)]
    assert min(scheduled(seeded)) == date(2026, 12, 1)


def _schedule_fixed_days(session_factory):
    session = session_factory()
    first = DailyVersePoolEntry(start_book="genesis", start_chapter=1, start_verse=1,
                                end_book="genesis", end_chapter=1, end_verse=3, schedule_count=0)
    second = DailyVersePoolEntry(start_book="exodus", start_chapter=1, start_verse=2,
                                 end_book="exodus", end_chapter=2, end_verse=1, schedule_count=0)
    session.add_all([first, second])
    session.flush()
    session.add_all([
        ScheduledDay(date=date(2026, 10, 18), pool_entry_id=first.id),
        ScheduledDay(date=date(2026, 10, 19), pool_entry_id=second.id),
    ])
    session.commit()
    session.close()


def test_get_scheduled_range(seeded, session) -> None:
    _schedule_fixed_days(seeded)
    assert get_scheduled_range(session, date(2026, 10, 18)) == VerseRange("genesis", 1, 1, "genesis", 1, 3)
    assert get_scheduled_range(session, date(2026, 10, 20)) is None
    assert make_scheduler(seeded).get_scheduled_range(date(2026, 10, 19)).end_book == "exodus"


def test_get_daily_verse(seeded, session) -> None:
    _schedule_fixed_days(seeded)
    result = get_daily_verse(session, date(2026, 10, 18), "vdcc")

    assert result["date"] == "2026-10-18"
    assert result["reference"] == "Genesis 1:1-3"
    assert [v["text"] for v in result["verses"]] == [
        "vdcc genesis 1:1", "vdcc genesis 1:2", "vdcc genesis 1:3",
    ]
    assert get_daily_verse(session, date(2026, 10, 25), "kjv") is None


def test_get_daily_verses_between(seeded, session) -> None:
    _schedule_fixed_days(seeded)
    results = get_daily_verses_between(session, date(2026, 10, 1), date(2026, 10, 31), "kjv")

    assert [r["date"] for r in results] == ["2026-10-18", "2026-10-19"]
    assert results[1]["reference"] == "Exodus 1:2 - 2:1"
    assert [(v["chapter"], v["verse"]) for v in results[1]["verses"]] == [(1, 2), (1, 3), (2, 1)]
    assert get_daily_verses_between(session, date(2027, 1, 1), date(2027, 1, 31), "kjv") == []
