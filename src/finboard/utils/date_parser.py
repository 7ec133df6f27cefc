"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIOD_NAMES = ("this-month", "this-year", "this-week", "last-month", "last-year", "last-week")


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and the
    relative forms "today", "yesterday", "this month", "last month",
    "this year", "last year", "this week" and "last week". Relative periods
    resolve to their first day.

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith(("this ", "last ")):
        period = date_str.replace(" ", "-", 1)
        if period in PERIOD_NAMES:
            start, _ = get_date_range(period, today=today)
            return start

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get inclusive start and end dates for a named calendar period.

    Args:
        period: One of this-month, this-year, this-week, last-month,
            last-year, last-week
        today: Reference date, defaults to the current date

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()
    month_start = today.replace(day=1)
    year_start = today.replace(month=1, day=1)
    week_start = today - timedelta(days=today.weekday())

    if period == "this-month":
        return (month_start, today)
    if period == "this-year":
        return (year_start, today)
    if period == "this-week":
        return (week_start, today)
    if period == "last-month":
        return (month_start - relativedelta(months=1), month_start - timedelta(days=1))
    if period == "last-year":
        return (year_start - relativedelta(years=1), year_start - timedelta(days=1))
    if period == "last-week":
        start = week_start - timedelta(days=7)
        return (start, start + timedelta(days=6))

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: {', '.join(PERIOD_NAMES)}"
    )
