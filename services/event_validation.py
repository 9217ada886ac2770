"""
Event validation: checks a cash-flow event payload before it reaches the store.

Returns human-readable messages; an empty list means the payload is valid.
The forecasting core assumes events have passed through here.
"""
import math

from models.cashflow import RECURRENCE_TYPES, TRANSACTION_CATEGORIES
from utils.dates import is_valid_iso_date


def _is_positive(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def _in_range(value, low: int, high: int) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return low <= value <= high


def validate_cash_flow_event(event: dict) -> list[str]:
    errors = []

    name = event.get("name")
    if not name or not str(name).strip():
        errors.append("Event name must not be empty")

    if not _is_positive(event.get("amount", 0)):
        errors.append("Amount must be greater than 0")

    if event.get("category") not in TRANSACTION_CATEGORIES:
        errors.append("Category must be income or expense")

    event_type = event.get("type")
    if event_type not in RECURRENCE_TYPES:
        errors.append("Recurrence type must be once, monthly or yearly")

    start_date = event.get("start_date")
    end_date = event.get("end_date")
    if not is_valid_iso_date(start_date):
        errors.append("Start date must be a valid YYYY-MM-DD date")

    if end_date and not is_valid_iso_date(end_date):
        errors.append("End date must be a valid YYYY-MM-DD date")

    # ISO strings compare chronologically
    if end_date and start_date and is_valid_iso_date(end_date) and is_valid_iso_date(start_date):
        if end_date < start_date:
            errors.append("End date must not be before start date")

    if event_type == "once":
        if not is_valid_iso_date(event.get("once_date")):
            errors.append("One-off events need a valid date")
    elif event_type == "monthly":
        if not _in_range(event.get("monthly_day"), 1, 31):
            errors.append("Monthly events need a day between 1 and 31")
    elif event_type == "yearly":
        if not _in_range(event.get("yearly_month"), 1, 12):
            errors.append("Yearly events need a month between 1 and 12")
        if not _in_range(event.get("yearly_day"), 1, 31):
            errors.append("Yearly events need a day between 1 and 31")

    return errors
