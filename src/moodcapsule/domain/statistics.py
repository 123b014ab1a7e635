"""Statistics derived from entry snapshots.

All functions here are pure: they take a sequence of entries and return a
number or a list, without touching any store.
"""

from collections import Counter
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional, Union

from moodcapsule.domain.entities import CalendarDay, Entry, StatisticsReport
from moodcapsule.domain.entry import EntryStore
from moodcapsule.utils.date_parser import calendar_day, days_in_month


def entry_days(entries: Iterable[Entry], tz: Optional[tzinfo] = None) -> set[date]:
    """Return the distinct calendar days covered by ``entries``."""
    return {calendar_day(entry.date, tz) for entry in entries}


def total_distinct_days(entries: Iterable[Entry], tz: Optional[tzinfo] = None) -> int:
    """Count distinct calendar days with at least one entry."""
    return len(entry_days(entries, tz))


def distinct_days_in_month(
    entries: Iterable[Entry],
    reference_date: Union[date, datetime],
    tz: Optional[tzinfo] = None,
) -> int:
    """Count distinct days with entries in the year and month of ``reference_date``."""
    reference = calendar_day(reference_date, tz)
    return sum(
        1
        for day in entry_days(entries, tz)
        if day.year == reference.year and day.month == reference.month
    )


def current_streak_days(
    entries: Iterable[Entry],
    today: Union[date, datetime],
    tz: Optional[tzinfo] = None,
) -> int:
    """Count consecutive days with entries, walking backward from ``today``.

    Returns 0 when ``today`` itself has no entry. Entries dated after
    ``today`` are neither required nor excluded.
    """
    days = entry_days(entries, tz)
    current = calendar_day(today, tz)
    streak = 0
    while current in days:
        streak += 1
        current -= timedelta(days=1)
    return streak


def month_calendar(
    entries: Iterable[Entry],
    reference_date: Union[date, datetime],
    tz: Optional[tzinfo] = None,
) -> list[CalendarDay]:
    """Return every day of the reference month with its entry count."""
    counts = Counter(calendar_day(entry.date, tz) for entry in entries)
    return [
        CalendarDay(day=day, entry_count=counts.get(day, 0))
        for day in days_in_month(calendar_day(reference_date, tz))
    ]


class StatisticsService:
    """Service computing statistics over an entry store's current snapshot."""

    def __init__(self, store: EntryStore):
        """Initialize statistics service.

        Args:
            store: Entry store to read from
        """
        self.store = store

    def build_report(self, today: Union[date, datetime]) -> StatisticsReport:
        """Build a statistics report relative to ``today``."""
        entries = self.store.list_entries()
        tz = self.store.tz
        return StatisticsReport(
            reference_day=calendar_day(today, tz),
            entry_count=len(entries),
            total_days=total_distinct_days(entries, tz),
            days_this_month=distinct_days_in_month(entries, today, tz),
            current_streak=current_streak_days(entries, today, tz),
        )

    def month_calendar(self, reference_date: Union[date, datetime]) -> list[CalendarDay]:
        """Return the month calendar for the store's entries."""
        return month_calendar(self.store.list_entries(), reference_date, self.store.tz)
