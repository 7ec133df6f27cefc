"""Dashboard period resolution and period-over-period comparison."""

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta

from finboard.domain.entities import PeriodKey, PeriodRange

DEFAULT_PERIOD = PeriodKey.SIX_MONTHS

_TRAILING_MONTHS = {
    PeriodKey.ONE_MONTH: 1,
    PeriodKey.THREE_MONTHS: 3,
    PeriodKey.SIX_MONTHS: 6,
}


def resolve_period(period_key: "str | PeriodKey", today: Optional[date] = None) -> PeriodRange:
    """Resolve a period key into current and previous inclusive date windows.

    Trailing-month periods start the same day-of-month n months back
    (clamped to the month's length) and compare against the n months
    immediately before that. Year-to-date compares against the whole prior
    calendar year. "all" has no lower bound and no comparison window.

    Args:
        period_key: One of 1m, 3m, 6m, ytd, all
        today: Reference date, defaults to the current date

    Raises:
        ValidationError: If the period key is unknown
    """
    key = PeriodKey.parse(period_key)
    today = today or date.today()

    if key in _TRAILING_MONTHS:
        months = relativedelta(months=_TRAILING_MONTHS[key])
        start = today - months
        prev_end = start - timedelta(days=1)
        return PeriodRange(
            key=key,
            start=start,
            end=today,
            prev_start=prev_end - months,
            prev_end=prev_end,
        )

    if key is PeriodKey.YEAR_TO_DATE:
        start = today.replace(month=1, day=1)
        prev_end = start - timedelta(days=1)
        return PeriodRange(
            key=key,
            start=start,
            end=today,
            prev_start=prev_end.replace(month=1, day=1),
            prev_end=prev_end,
        )

    return PeriodRange(key=key, start=None, end=today)


def in_window(value: date, start: Optional[date], end: Optional[date]) -> bool:
    """Inclusive date-range membership; a None bound is open."""
    if start is not None and value < start:
        return False
    if end is not None and value > end:
        return False
    return True


def percentage_change(current: int, previous: int) -> Optional[Decimal]:
    """Percentage change between two minor-unit totals.

    The divisor is abs(previous) so a move from a loss towards a profit
    reads as positive. When previous is zero the change is 0 if current is
    also zero and None (not applicable) otherwise. The result is unrounded;
    rounding happens when it is formatted.
    """
    if previous == 0:
        return Decimal(0) if current == 0 else None
    return Decimal(current - previous) * 100 / abs(Decimal(previous))
