"""Local-date helpers for filtering sessions and files by calendar day."""

from datetime import date, datetime, timedelta
from typing import Iterator

from claude_session_insights.types.aggregations import DateFilter


def to_local_date(timestamp_ms: int | float) -> str:
    """Convert an epoch-millisecond timestamp to YYYY-MM-DD in local time."""
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d")


def mtime_to_local_date(mtime: float) -> str:
    """Convert a file mtime (epoch seconds) to YYYY-MM-DD in local time."""
    return datetime.fromtimestamp(mtime).strftime("%Y-%m-%d")


def today(now: datetime | None = None) -> str:
    """Today's date as YYYY-MM-DD."""
    if now is None:
        now = datetime.now()
    return now.strftime("%Y-%m-%d")


def format_time(timestamp_ms: int | float) -> str:
    """Format an epoch-millisecond timestamp as HH:MM (24h, local time)."""
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%H:%M")


def in_date_range(day: str, from_date: str, to_date: str) -> bool:
    # ISO dates compare correctly as strings
    return from_date <= day <= to_date


def resolve_date_range(
    date_filter: DateFilter | None = None,
    now: datetime | None = None,
) -> tuple[str, str]:
    """Resolve a DateFilter to a concrete (from, to) pair.

    date wins; from+to is used as given; from alone runs through today;
    nothing at all means today only.
    """
    if date_filter is not None:
        if date_filter.date:
            return date_filter.date, date_filter.date
        if date_filter.from_date and date_filter.to_date:
            return date_filter.from_date, date_filter.to_date
        if date_filter.from_date:
            return date_filter.from_date, today(now)
    t = today(now)
    return t, t


def iter_dates(from_date: str, to_date: str) -> Iterator[str]:
    """Yield every calendar day from from_date to to_date inclusive."""
    day = date.fromisoformat(from_date)
    end = date.fromisoformat(to_date)
    while day <= end:
        yield day.isoformat()
        day += timedelta(days=1)
