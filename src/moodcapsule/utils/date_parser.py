"""Date parsing and calendar-day utilities."""

from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional, Union
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last monday", "this week", etc.

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if today is None:
        today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "week":
            # Monday of last week
            return today - timedelta(days=today.weekday() + 7)
        elif period in WEEKDAYS:
            days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7
            if days_ago == 0:
                days_ago = 7
            return today - timedelta(days=days_ago)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_datetime(value: str, now: Optional[datetime] = None) -> datetime:
    """Parse a date or date-time string into a datetime.

    The result is naive unless the string carries a UTC offset.

    "now" returns the current moment. Relative day words keep the current
    time of day so that entries written "yesterday" sort naturally. Strings
    without a time component resolve to midnight.

    Raises:
        ValueError: If the string cannot be parsed
    """
    if now is None:
        now = datetime.now()
    text = value.strip().lower()

    if text == "now":
        return now
    if text in ("today", "yesterday", "tomorrow"):
        day = parse_date(text, today=now.date())
        return datetime.combine(day, now.time())

    try:
        day = parse_date(text, today=now.date())
    except ValueError:
        day = None
    if day is not None and text.split(" ", 1)[0] in ("last", "this"):
        return datetime.combine(day, time.min)

    try:
        return date_parser.parse(text)
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}")


def calendar_day(value: Union[date, datetime], tz: Optional[tzinfo] = None) -> date:
    """Return the calendar day a date or datetime falls on.

    Aware datetimes are converted to ``tz`` first when one is given; naive
    datetimes are taken at face value.
    """
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def as_datetime(value: Union[date, datetime], tz: Optional[tzinfo] = None) -> datetime:
    """Return a naive wall-clock datetime in ``tz``.

    Plain dates become midnight of that day. Aware datetimes are converted
    to ``tz`` (or to local time when ``tz`` is None) and lose their tzinfo.
    Naive datetimes are taken to be in ``tz`` already.
    """
    if not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    if value.tzinfo is None:
        return value
    return value.astimezone(tz).replace(tzinfo=None)


def days_in_month(reference: date) -> list[date]:
    """Return every day of the month containing ``reference``."""
    start = reference.replace(day=1)
    end = start + relativedelta(months=1)
    return [start + timedelta(days=offset) for offset in range((end - start).days)]
