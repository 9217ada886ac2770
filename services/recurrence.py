"""
Recurrence Matcher: decides whether a cash-flow event fires on a given day.

Pure functions. No database access; no side effects.
A missing kind-specific field (e.g. a monthly event without ``monthly_day``)
means the event never fires; it is not an error here.
"""
from datetime import date

from models.cashflow import CashFlowEvent
from utils.dates import (
    calendar_months_between,
    is_leap_year,
    last_day_of_month,
    parse_iso_date,
)


def is_active_on(event: CashFlowEvent, day: date) -> bool:
    """True when ``day`` falls inside the event's inclusive [start, end] window."""
    if day < parse_iso_date(event.start_date):
        return False
    if event.end_date and day > parse_iso_date(event.end_date):
        return False
    return True


def clamp_monthly_day(day: date, monthly_day: int) -> int:
    """Rule day 31 fires on the 30th, 28th or 29th in shorter months."""
    return min(monthly_day, last_day_of_month(day.year, day.month))


def normalize_yearly_day(day: date, month: int, month_day: int) -> tuple[int, int]:
    # Feb 29 rules fall back to Feb 28 in non-leap years of the evaluated date
    if month == 2 and month_day == 29 and not is_leap_year(day.year):
        return month, 28
    return month, month_day


def _matches_once(event: CashFlowEvent, day: date) -> bool:
    target = parse_iso_date(event.once_date or event.start_date)
    return day == target


def _matches_monthly(event: CashFlowEvent, day: date) -> bool:
    if not event.monthly_day:
        return False
    if calendar_months_between(parse_iso_date(event.start_date), day) < 0:
        return False
    return day.day == clamp_monthly_day(day, event.monthly_day)


def _matches_yearly(event: CashFlowEvent, day: date) -> bool:
    if not event.yearly_month or not event.yearly_day:
        return False
    month, month_day = normalize_yearly_day(day, event.yearly_month, event.yearly_day)
    return day.month == month and day.day == month_day


_MATCHERS = {
    "once": _matches_once,
    "monthly": _matches_monthly,
    "yearly": _matches_yearly,
}


def occurs_on(event: CashFlowEvent, day: date) -> bool:
    """
    Deterministically decide whether ``event`` fires on ``day``.

    Args:
        event: Event definition; assumed validated upstream.
        day: Calendar day being evaluated.

    Returns:
        False for disabled events, days outside the activity window, unknown
        recurrence types and events missing their kind-specific fields.
    """
    if not event.enabled:
        return False
    if not is_active_on(event, day):
        return False

    matcher = _MATCHERS.get(event.type)
    if matcher is None:
        return False
    return matcher(event, day)
