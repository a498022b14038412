"""Daily verse scheduling and reads.

The scheduler keeps a rolling buffer of future ``ScheduledDay`` rows. Each
day gets one pool entry, picked at random among the least recently used
entries so the same verses do not keep coming back.
"""
import calendar
import logging
import random
from collections import Counter
from datetime import date, datetime, timedelta, timezone

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from config import Config
from database import get_db_session
from models import DailyVersePoolEntry, ScheduledDay, ScheduleBatch
from utils.book_catalog import CATALOG
from utils.errors import SchedulingConflictError, StorageError
from utils.range_query import fetch_passage, fetch_ranges

logger = logging.getLogger(__name__)


def _utcnow():
    return datetime.now(timezone.utc)


def add_months(year, month, offset):
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def month_bounds(year, month):
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def iter_month(year, month):
    first, last = month_bounds(year, month)
    day = first
    while day <= last:
        yield day
        day += timedelta(days=1)


class DailyVerseScheduler:
    def __init__(self, session_factory=None, rng=None, clock=None,
                 window=Config.SCHEDULER_CANDIDATE_WINDOW):
        self.session_factory = session_factory
        self.rng = rng or random.Random()
        self.clock = clock or _utcnow
        self.window = window

    def select_entry(self, candidates):
        """Weighted least-recently-used pick.

        Never scheduled entries sort first, then the oldest
        ``last_scheduled_at``. Ties keep the candidates' order. One of the
        first ``window`` is chosen uniformly.
        """
        def lru_key(entry):
            last = entry.last_scheduled_at
            return (last is not None, last.replace(tzinfo=None) if last else datetime.min)

        ordered = sorted(candidates, key=lru_key)
        return self.rng.choice(ordered[:self.window])

    def schedule_month(self, year, month):
        """Assign a pool entry to every day of ``year``-``month``.

        Returns the number of days written; 0 when the pool is empty or the
        month was already scheduled by another run.
        """
        try:
            with get_db_session(self.session_factory) as db:
                pool = db.query(DailyVersePoolEntry).order_by(DailyVersePoolEntry.id).all()
                if not pool:
                    logger.warning(f"No verses in pool to schedule for {year}-{month:02d}")
                    return 0

                db.add(ScheduleBatch(year=year, month=month))
                try:
                    db.flush()
                except IntegrityError:
                    db.rollback()
                    logger.info(f"{year}-{month:02d} already scheduled by another run, skipping")
                    return 0

                now = self.clock()
                counts = Counter()
                days = []
                for day in iter_month(year, month):
                    month_day = day.strftime('%m-%d')
                    pinned = [e for e in pool if e.publish_date == month_day]
                    entry = self.select_entry(pinned or pool)
                    # Stamp right away so later days in this month see it as recent;
                    # requeue it so entries sharing ``now`` keep their pick order
                    entry.last_scheduled_at = now
                    pool.remove(entry)
                    pool.append(entry)
                    counts[entry.id] += 1
                    days.append(ScheduledDay(date=day, pool_entry_id=entry.id))

                db.add_all(days)
                try:
                    db.flush()
                except IntegrityError as e:
                    raise SchedulingConflictError(
                        f"Scheduled days for {year}-{month:02d} collide with existing rows"
                    ) from e

                by_id = {e.id: e for e in pool}
                for entry_id, count in counts.items():
                    entry = by_id[entry_id]
                    entry.schedule_count = (entry.schedule_count or 0) + count

                logger.info(f"Scheduled {len(days)} verses for {year}-{month:02d} "
                            f"using {len(counts)} pool entries")
                return len(days)
        except SchedulingConflictError:
            raise
        except SQLAlchemyError as e:
            raise StorageError(f"Scheduling {year}-{month:02d} failed: {e}") from e

    def has_scheduled_days(self, year, month):
        first, last = month_bounds(year, month)
        try:
            with get_db_session(self.session_factory) as db:
                row = (db.query(ScheduledDay.id)
                       .filter(ScheduledDay.date.between(first, last))
                       .first())
                return row is not None
        except SQLAlchemyError as e:
            raise StorageError(f"Checking schedule for {year}-{month:02d} failed: {e}") from e

    def ensure_buffer(self, today=None):
        """Keep next month and the month after scheduled.

        On an empty schedule both months are filled; afterwards only the
        month after next is added when missing. Returns the (year, month)
        pairs where days were actually written.
        """
        today = today or self.clock().date()
        next_month = add_months(today.year, today.month, 1)
        month_after = add_months(today.year, today.month, 2)

        if not self.has_scheduled_days(*next_month):
            logger.info("First run detected. Scheduling for next 2 months...")
            targets = [next_month, month_after]
        elif not self.has_scheduled_days(*month_after):
            logger.info(f"Scheduling for {month_after[0]}-{month_after[1]:02d}...")
            targets = [month_after]
        else:
            logger.info("Verses already scheduled for the next 2 months. Nothing to do.")
            return []

        written = []
        for year, month in targets:
            if self.schedule_month(year, month):
                written.append((year, month))
        return written

    def get_scheduled_range(self, day):
        with get_db_session(self.session_factory) as db:
            return get_scheduled_range(db, day)


def get_scheduled_range(session, day):
    """The ``VerseRange`` scheduled for ``day``, or None."""
    try:
        entry = (session.query(DailyVersePoolEntry)
                 .join(ScheduledDay, ScheduledDay.pool_entry_id == DailyVersePoolEntry.id)
                 .filter(ScheduledDay.date == day)
                 .first())
    except SQLAlchemyError as e:
        raise StorageError(f"Failed to read schedule for {day}: {e}") from e
    return entry.verse_range if entry else None


def get_daily_verse(session, day, translation_slug, catalog=CATALOG):
    """Daily verse for ``day`` (defaults to today) with text in one translation."""
    day = day or _utcnow().date()
    verse_range = get_scheduled_range(session, day)
    if verse_range is None:
        return None
    verses = fetch_passage(session, verse_range, translation_slug, limit=None, catalog=catalog)
    return {
        "date": day.isoformat(),
        "reference": verse_range.label(catalog),
        "verses": [v.to_json() for v in verses],
    }


def get_daily_verses_between(session, start, end, translation_slug, catalog=CATALOG):
    """Daily verses for every scheduled day in ``start``..``end``, hydrated in one query."""
    try:
        rows = (session.query(ScheduledDay.date, DailyVersePoolEntry)
                .join(DailyVersePoolEntry, ScheduledDay.pool_entry_id == DailyVersePoolEntry.id)
                .filter(ScheduledDay.date.between(start, end))
                .order_by(ScheduledDay.date)
                .all())
    except SQLAlchemyError as e:
        raise StorageError(f"Failed to read schedule between {start} and {end}: {e}") from e
    if not rows:
        return []

    ranges = [entry.verse_range for _, entry in rows]
    hydrated = fetch_ranges(session, ranges, translation_slug, catalog=catalog)
    return [
        {
            "date": day.isoformat(),
            "reference": verse_range.label(catalog),
            "verses": [v.to_json() for v in verses],
        }
        for (day, _), verse_range, verses in zip(rows, ranges, hydrated)
    ]
