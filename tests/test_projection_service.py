from datetime import date, timedelta

import pytest

from models.account import BalanceSnapshot
from models.cashflow import CashFlowEvent
from services.projection_service import expand_segment, generate_timeline
from utils.money import round_money


def _event(**overrides):
    fields = {
        "id": "evt-test",
        "name": "Salary",
        "amount": 2000.0,
        "category": "income",
        "type": "monthly",
        "start_date": "2025-01-01",
        "monthly_day": 10,
    }
    fields.update(overrides)
    return CashFlowEvent(**fields)


def _snapshot(snapshot_id, day, balance):
    return BalanceSnapshot(id=snapshot_id, date=day, balance=balance, source="initial")


def test_salary_and_mortgage_over_two_months():
    events = [
        _event(),
        _event(id="evt-expense", name="Mortgage", amount=3000.0, category="expense", monthly_day=20),
    ]

    timeline = generate_timeline(events, [_snapshot("snap-1", "2025-01-01", 10000.0)], 2,
                                 mode="latest", today="2025-01-01")

    salary_days = [p for p in timeline if any(e.event_id == "evt-test" for e in p.events)]
    assert len(salary_days) == 2
    assert salary_days[0].date == "2025-01-10"
    assert timeline[0].balance == 10000
    assert timeline[0].is_today
    assert timeline[-1].date == "2025-03-01"


def test_monthly_day_31_lands_on_month_ends():
    timeline = generate_timeline([_event(id="evt-31", monthly_day=31)],
                                 [_snapshot("snap-2", "2025-01-01", 0.0)], 2,
                                 today="2025-01-01")
    by_date = {p.date: p for p in timeline}

    assert by_date["2025-01-31"].events[0].event_id == "evt-31"
    assert by_date["2025-02-28"].events[0].event_id == "evt-31"
    assert by_date["2025-01-31"].events[0].id == "evt-31-2025-01-31"


def test_no_snapshots_means_no_timeline():
    assert generate_timeline([_event()], [], 12, today="2025-01-01") == []
    assert generate_timeline([], [], 1, mode="segments", today="2025-01-01") == []


def test_latest_mode_uses_newest_snapshot_regardless_of_order():
    snapshots = [
        _snapshot("snap-new", "2025-03-01", 500.0),
        _snapshot("snap-old", "2025-01-01", 100.0),
        _snapshot("snap-mid", "2025-02-01", 300.0),
    ]

    timeline = generate_timeline([], snapshots, 1, today="2025-01-01")

    assert timeline[0].date == "2025-03-01"
    assert timeline[0].balance == 500.0
    assert {p.snapshot_id for p in timeline} == {"snap-new"}


def test_generate_is_idempotent():
    events = [_event(), _event(id="evt-once", type="once", once_date="2025-02-14",
                               category="expense", amount=99.99)]
    snapshots = [_snapshot("snap-1", "2025-01-01", 1234.56)]

    first = generate_timeline(events, snapshots, 6, today="2025-01-15")
    second = generate_timeline(events, snapshots, 6, today="2025-01-15")

    assert first == second


def test_balance_carries_day_to_day_with_cent_rounding():
    events = [
        _event(id="a", amount=0.1, type="once", once_date="2025-01-02"),
        _event(id="b", amount=0.2, type="once", once_date="2025-01-02"),
        _event(id="c", amount=33.333, category="expense", monthly_day=5),
    ]
    timeline = generate_timeline(events, [_snapshot("s", "2025-01-01", 100.0)], 3,
                                 today="2025-01-01")

    assert timeline[1].change == pytest.approx(0.3)
    assert timeline[1].balance == 100.3
    for previous, current in zip(timeline, timeline[1:]):
        assert current.balance == round_money(previous.balance + current.change)


def test_change_keeps_sub_cent_amounts():
    events = [_event(id="c", amount=33.333, category="expense", monthly_day=5)]
    timeline = generate_timeline(events, [_snapshot("s", "2025-01-01", 100.0)], 3,
                                 today="2025-01-01")

    by_date = {point.date: point for point in timeline}
    assert by_date["2025-01-05"].change == -33.333
    assert by_date["2025-01-05"].balance == 66.67
    spent = -sum(point.change for point in timeline)
    assert spent == pytest.approx(sum(occ.amount for point in timeline for occ in point.events))


def test_day_flags():
    timeline = expand_segment("2025-01-01", 0.0, [], 1, today="2025-01-03", snapshot_id="s")
    by_date = {p.date: p for p in timeline}

    assert by_date["2025-01-02"].is_past
    assert not by_date["2025-01-03"].is_past
    assert by_date["2025-01-03"].is_today
    assert by_date["2025-01-04"].is_weekend  # Saturday
    assert by_date["2025-01-05"].is_weekend  # Sunday
    assert not by_date["2025-01-06"].is_weekend
    assert sum(p.is_today for p in timeline) == 1


def test_segment_end_clamps_to_month_end():
    timeline = expand_segment("2025-01-31", 0.0, [], 1, today="2025-01-31")

    assert timeline[-1].date == "2025-02-28"
    assert len(timeline) == 29


def test_segment_stops_before_next_anchor():
    timeline = expand_segment("2025-01-01", 0.0, [], 3, today="2025-01-01",
                              end_before_date="2025-01-15")

    assert timeline[-1].date == "2025-01-14"


def test_segment_ignores_end_before_date_past_the_horizon():
    timeline = expand_segment("2025-01-01", 0.0, [], 1, today="2025-01-01",
                              end_before_date="2025-06-01")

    assert timeline[-1].date == "2025-02-01"


def test_segments_mode_is_contiguous_and_reanchors():
    events = [_event(monthly_day=20)]
    snapshots = [
        _snapshot("snap-b", "2025-01-15", 5000.0),
        _snapshot("snap-a", "2025-01-01", 1000.0),
    ]

    timeline = generate_timeline(events, snapshots, 1, mode="segments", today="2025-01-01")

    dates = [date.fromisoformat(p.date) for p in timeline]
    assert dates[0] == date(2025, 1, 1)
    assert all(b - a == timedelta(days=1) for a, b in zip(dates, dates[1:]))
    assert len(set(dates)) == len(dates)

    first = [p for p in timeline if p.snapshot_id == "snap-a"]
    second = [p for p in timeline if p.snapshot_id == "snap-b"]
    assert first[-1].date == "2025-01-14"
    assert second[0].date == "2025-01-15"
    assert second[0].balance == 5000.0
    assert timeline[-1].date == "2025-02-15"
    # the Jan 20 salary belongs to the second segment only
    assert next(p for p in second if p.date == "2025-01-20").balance == 7000.0


def test_disabled_events_are_skipped():
    timeline = generate_timeline([_event(enabled=False)], [_snapshot("s", "2025-01-01", 10.0)], 2,
                                 today="2025-01-01")

    assert all(p.events == () for p in timeline)
    assert timeline[-1].balance == 10.0


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        generate_timeline([], [_snapshot("s", "2025-01-01", 0.0)], 1, mode="replay")


def test_inputs_are_not_mutated():
    events = [_event()]
    snapshots = [_snapshot("b", "2025-02-01", 1.0), _snapshot("a", "2025-01-01", 2.0)]

    generate_timeline(events, snapshots, 1, mode="segments", today="2025-01-01")

    assert [s.id for s in snapshots] == ["b", "a"]
