from datetime import date, timedelta

from models.cashflow import CashFlowEvent
from services.recurrence import occurs_on


def _event(**overrides):
    fields = {
        "id": "evt-test",
        "name": "Salary",
        "amount": 2000.0,
        "category": "income",
        "type": "monthly",
        "start_date": "2024-01-01",
        "monthly_day": 10,
    }
    fields.update(overrides)
    return CashFlowEvent(**fields)


def _firing_days(event, start, end):
    days = []
    day = start
    while day <= end:
        if occurs_on(event, day):
            days.append(day)
        day += timedelta(days=1)
    return days


def test_monthly_day_31_clamps_to_month_end():
    event = _event(monthly_day=31)

    assert occurs_on(event, date(2025, 1, 31))
    assert occurs_on(event, date(2025, 4, 30))
    assert occurs_on(event, date(2025, 2, 28))
    assert occurs_on(event, date(2024, 2, 29))
    assert not occurs_on(event, date(2024, 2, 28))
    assert not occurs_on(event, date(2025, 4, 29))


def test_monthly_day_31_fires_once_per_month_for_a_year():
    event = _event(monthly_day=31)
    days = _firing_days(event, date(2025, 1, 1), date(2025, 12, 31))

    assert len(days) == 12
    assert [d.month for d in days] == list(range(1, 13))
    assert date(2025, 6, 30) in days
    assert date(2025, 9, 30) in days


def test_monthly_ignores_months_before_start():
    event = _event(start_date="2025-03-15", monthly_day=10)

    assert not occurs_on(event, date(2025, 3, 10))
    assert not occurs_on(event, date(2025, 2, 10))
    assert occurs_on(event, date(2025, 4, 10))


def test_yearly_feb_29_follows_the_evaluated_year():
    event = _event(type="yearly", monthly_day=None, yearly_month=2, yearly_day=29,
                   start_date="2020-01-01")

    assert occurs_on(event, date(2024, 2, 29))
    assert not occurs_on(event, date(2024, 2, 28))
    assert occurs_on(event, date(2025, 2, 28))
    assert occurs_on(event, date(2027, 2, 28))
    assert not occurs_on(event, date(2025, 3, 1))


def test_yearly_regular_day():
    event = _event(type="yearly", yearly_month=7, yearly_day=4)
    days = _firing_days(event, date(2024, 1, 1), date(2026, 12, 31))

    assert days == [date(2024, 7, 4), date(2025, 7, 4), date(2026, 7, 4)]


def test_once_uses_once_date_then_start_date():
    explicit = _event(type="once", once_date="2025-01-15", start_date="2025-01-01")
    implicit = _event(type="once", start_date="2025-01-20")

    assert occurs_on(explicit, date(2025, 1, 15))
    assert not occurs_on(explicit, date(2025, 1, 1))
    assert occurs_on(implicit, date(2025, 1, 20))
    assert not occurs_on(implicit, date(2025, 1, 21))


def test_activity_window_is_inclusive():
    event = _event(start_date="2025-01-10", end_date="2025-03-10", monthly_day=10)
    days = _firing_days(event, date(2025, 1, 1), date(2025, 6, 30))

    assert days == [date(2025, 1, 10), date(2025, 2, 10), date(2025, 3, 10)]


def test_disabled_event_never_fires():
    event = _event(enabled=False)

    assert _firing_days(event, date(2025, 1, 1), date(2025, 3, 31)) == []


def test_missing_kind_fields_degrade_to_no_occurrences():
    monthly = _event(monthly_day=None)
    yearly = _event(type="yearly", yearly_month=3, yearly_day=None)
    unknown = _event(type="weekly")

    for event in (monthly, yearly, unknown):
        assert _firing_days(event, date(2025, 1, 1), date(2025, 12, 31)) == []
