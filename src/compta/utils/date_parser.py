"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = (
    "this-month",
    "this-quarter",
    "this-year",
    "last-month",
    "last-quarter",
    "last-year",
)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports ISO dates, day-first dates ("15/01/2024") and relative dates:
    "today", "yesterday", "aujourd'hui", "hier", "start of month",
    "end of month", "start of year", "end of year", "last month" and
    "last year" (first day of that period).

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "aujourd'hui": today,
        "yesterday": today - timedelta(days=1),
        "hier": today - timedelta(days=1),
        "start of month": today.replace(day=1),
        "end of month": today.replace(day=1) + relativedelta(months=1, days=-1),
        "start of year": today.replace(month=1, day=1),
        "end of year": today.replace(month=12, day=31),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # ISO dates are unambiguous; everything else is read day-first
    try:
        if len(date_str) == 10 and date_str[4] == "-":
            return date.fromisoformat(date_str)
        return date_parser.parse(date_str, dayfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def _quarter_start(day: date) -> date:
    return day.replace(month=3 * ((day.month - 1) // 3) + 1, day=1)


def get_date_range(period: str, today: date | None = None) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Periods are full calendar periods, so "this-month" ends on the last day
    of the current month.

    Args:
        period: One of PERIODS
        today: Reference date (defaults to date.today())

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    if period == "this-month":
        start_date = today.replace(day=1)
        return (start_date, start_date + relativedelta(months=1, days=-1))

    elif period == "this-quarter":
        start_date = _quarter_start(today)
        return (start_date, start_date + relativedelta(months=3, days=-1))

    elif period == "this-year":
        return (today.replace(month=1, day=1), today.replace(month=12, day=31))

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        return (start_date, today.replace(day=1) - timedelta(days=1))

    elif period == "last-quarter":
        end_date = _quarter_start(today) - timedelta(days=1)
        return (_quarter_start(end_date), end_date)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        return (start_date, start_date.replace(month=12, day=31))

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
