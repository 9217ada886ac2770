from models.account import BalanceSnapshot
from models.cashflow import CashFlowEvent
from services.forecast_cache import build_forecast, forecast_cache_info

EVENTS = [
    CashFlowEvent(id="salary", name="Salary", amount=2000.0, category="income",
                  type="monthly", start_date="2025-01-01", monthly_day=10),
]
SNAPSHOTS = [BalanceSnapshot(id="snap", date="2025-01-01", balance=100.0, source="initial")]


def test_equal_inputs_hit_the_cache():
    first = build_forecast(EVENTS, SNAPSHOTS, 3, today="2025-01-01", warning_threshold=50)
    second = build_forecast(list(EVENTS), list(SNAPSHOTS), 3, today="2025-01-01", warning_threshold=50)

    assert first is second
    assert forecast_cache_info().hits == 1


def test_changed_inputs_recompute():
    base = build_forecast(EVENTS, SNAPSHOTS, 3, today="2025-01-01", warning_threshold=50)
    later = build_forecast(EVENTS, SNAPSHOTS, 3, today="2025-02-01", warning_threshold=50)
    stricter = build_forecast(EVENTS, SNAPSHOTS, 3, today="2025-01-01", warning_threshold=5000)

    assert base is not later
    assert base.timeline[0].is_today
    assert not later.timeline[0].is_today
    assert stricter.summary.warning_dates
    assert base.summary.warning_dates == ()


def test_summary_matches_timeline():
    forecast = build_forecast(EVENTS, SNAPSHOTS, 2, today="2025-01-01")

    assert forecast.summary.ending_balance == forecast.timeline[-1].balance
    assert forecast.summary.total_income == 4000.0
