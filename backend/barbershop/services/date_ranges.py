"""
Report period resolution.

Turns a named period (``today``, ``week``, ``month``) or an explicit
year/month into a half-open ``DateRange``. Adjacent ranges share their
boundary instant, so a record can never be counted in two consecutive
periods nor fall between them.

Every function takes ``now`` explicitly. Ranges are built in ``now``'s own
civil calendar: an aware ``now`` yields aware boundaries in the same zone,
a naive ``now`` yields naive boundaries.

Weeks start on Monday (ISO 8601).
"""

from datetime import date, datetime, timedelta, tzinfo
from typing import List, Optional

from barbershop.core import config
from barbershop.core.exceptions import InvalidMonth, InvalidPeriod, ReportingError
from barbershop.domain.entities import DateRange

PERIOD_TODAY = "today"
PERIOD_WEEK = "week"
PERIOD_MONTH = "month"
PERIODS = (PERIOD_TODAY, PERIOD_WEEK, PERIOD_MONTH)


def _midnight(day: date, tz: Optional[tzinfo]) -> datetime:
    # Built from the calendar date so DST transitions keep 00:00 wall time
    return datetime(day.year, day.month, day.day, tzinfo=tz)


def _first_of_next_month(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def first_instant_of_month(now: datetime) -> datetime:
    """Midnight of the first day of ``now``'s month, in ``now``'s zone."""
    return _midnight(now.date().replace(day=1), now.tzinfo)


def resolve_named(period: str, now: datetime) -> DateRange:
    """Resolve ``today``, ``week`` or ``month`` around ``now``.

    Raises:
        InvalidPeriod: for any other tag.
    """
    today = now.date()
    tz = now.tzinfo

    if period == PERIOD_TODAY:
        return DateRange(_midnight(today, tz), _midnight(today + timedelta(days=1), tz))

    if period == PERIOD_WEEK:
        monday = today - timedelta(days=today.weekday())
        return DateRange(_midnight(monday, tz), _midnight(monday + timedelta(days=7), tz))

    if period == PERIOD_MONTH:
        first = today.replace(day=1)
        return DateRange(_midnight(first, tz), _midnight(_first_of_next_month(first), tz))

    raise InvalidPeriod(period)


def resolve_month(
    year: int, month_index: int, now: Optional[datetime] = None
) -> DateRange:
    """Resolve an arbitrary month, ``month_index`` being 0-based (0 = January).

    ``now`` is optional and only contributes its timezone. December rolls
    over to January of ``year + 1``.

    Raises:
        InvalidMonth: if ``month_index`` is not in [0, 11].
    """
    if isinstance(month_index, bool) or not isinstance(month_index, int):
        raise InvalidMonth(month_index)
    if not 0 <= month_index <= 11:
        raise InvalidMonth(month_index)
    # datetime cannot represent the exclusive end of December 9999
    if isinstance(year, bool) or not isinstance(year, int) or not 1 <= year <= 9998:
        raise ReportingError(f"Year out of range: {year}")

    tz = now.tzinfo if now is not None else None
    first = date(year, month_index + 1, 1)
    return DateRange(_midnight(first, tz), _midnight(_first_of_next_month(first), tz))


def month_options() -> List[int]:
    """0-based month indexes offered by the commission report picker."""
    return list(range(12))


def year_options(now: datetime, count: Optional[int] = None) -> List[int]:
    """Years offered by the report picker, newest first, current year included."""
    if count is None:
        count = config.REPORT_YEARS_BACK
    return [now.year - offset for offset in range(count)]
