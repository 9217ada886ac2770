import calendar
from datetime import date, datetime, timezone
from functools import lru_cache


@lru_cache(maxsize=4096)
def parse_iso_date(raw_date: str) -> date:
    """Parse a ``YYYY-MM-DD`` string; raises ValueError for anything else."""
    if not isinstance(raw_date, str) or len(raw_date) != 10:
        raise ValueError(f"invalid ISO date: {raw_date!r}")
    return datetime.strptime(raw_date, "%Y-%m-%d").date()


def is_valid_iso_date(value) -> bool:
    if not value:
        return False
    try:
        parse_iso_date(value)
    except (TypeError, ValueError):
        return False
    return True


def to_iso(day: date) -> str:
    return day.isoformat()


def resolve_today(today: str | None = None) -> date:
    """Reference day: the explicit override when given, else the real current day."""
    if today:
        return parse_iso_date(today)
    return date.today()


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def is_leap_year(year: int) -> bool:
    return calendar.isleap(year)


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(day: date, months: int) -> date:
    """Shift by whole calendar months, clamping to the end of the target month.

    2025-01-31 + 1 month is 2025-02-28.
    """
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, min(day.day, last_day_of_month(year, month)))


def calendar_months_between(earlier: date, later: date) -> int:
    """Calendar-month distance, ignoring the day of month (negative when ``later`` is earlier)."""
    return (later.year - earlier.year) * 12 + (later.month - earlier.month)


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def month_key(day: date) -> str:
    return day.strftime("%Y-%m")


def month_label(day: date) -> str:
    return day.strftime("%Y %b")
