"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

_DAYS_AGO = re.compile(r"^(\d+)\s+days?\s+ago$")


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse an entry date.

    Supports:
    - Absolute dates: "2025-12-01", "1 December 2025", "Dec 1 2025"
    - Relative days: "today", "yesterday", "3 days ago"
    - "last monday" ... "last sunday" (most recent such day before today)
    - "this month" / "last month" (first day of that month)

    Args:
        date_str: Date string
        today: Reference date, defaults to the current date

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    if date_str == "today":
        return today
    if date_str == "yesterday":
        return today - timedelta(days=1)

    match = _DAYS_AGO.match(date_str)
    if match:
        return today - timedelta(days=int(match.group(1)))

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        if period in WEEKDAYS:
            days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7 or 7
            return today - timedelta(days=days_ago)

    if date_str == "this month":
        return today.replace(day=1)

    try:
        return date_parser.parse(date_str, dayfirst=False, yearfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
