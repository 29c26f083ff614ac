"""Time utilities for asset timestamps and history windows."""

from datetime import date, datetime, timedelta
from typing import Union

import pytz
from dateutil import parser as date_parser

UTC = pytz.utc


def now_utc() -> datetime:
    """Return current time in UTC."""
    return datetime.now(UTC)


def today_utc() -> date:
    """Return today's calendar date in UTC."""
    return now_utc().date()


def now_millis() -> int:
    """Return the current UTC time as epoch milliseconds."""
    return int(now_utc().timestamp() * 1000)


def cutoff_date(days: int, today: date) -> str:
    """Return the ISO date `days` before `today`."""
    return (today - timedelta(days=days)).isoformat()


def parse_date(value: Union[str, date, datetime]) -> date:
    """
    Parse a provider or user supplied date into a calendar date.

    Accepts ISO dates, full timestamps and date/datetime objects.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.parse(value).date()
