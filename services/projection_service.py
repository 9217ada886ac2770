from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from models.account import BalanceSnapshot
from models.cashflow import CashFlowEvent
from models.projection_dto import DailyPoint, EventOccurrence
from services.recurrence import occurs_on
from utils.dates import add_months, is_weekend, parse_iso_date, resolve_today, to_iso
from utils.money import round_money

PROJECTION_MODES = ("latest", "segments")


def collect_occurrences(day: date, events: Iterable[CashFlowEvent]) -> tuple[EventOccurrence, ...]:
    day_iso = to_iso(day)
    return tuple(
        EventOccurrence(
            id=f"{event.id}-{day_iso}",
            event_id=event.id,
            name=event.name,
            category=event.category,
            amount=event.amount,
            date=day_iso,
        )
        for event in events
        if occurs_on(event, day)
    )


def daily_change(occurrences: Iterable[EventOccurrence]) -> float:
    # unrounded; only the running balance is rounded to cents
    return sum((
        occ.amount if occ.category == "income" else -occ.amount
        for occ in occurrences
    ), 0.0)


def expand_segment(
    start_date: str,
    starting_balance: float,
    events: Sequence[CashFlowEvent],
    horizon_months: int,
    today: Optional[str] = None,
    end_before_date: Optional[str] = None,
    snapshot_id: Optional[str] = None,
) -> list[DailyPoint]:
    """Dense daily projection for one anchor.

    Runs from ``start_date`` through ``start_date + horizon_months`` (inclusive).
    When ``end_before_date`` is not after that horizon end, the segment stops the
    day before it so the next segment's anchor day is not covered twice.

    The balance is rounded to cents once per day, on top of the previous day's
    rounded balance.
    """
    reference_day = resolve_today(today)
    start = parse_iso_date(start_date)
    end = add_months(start, horizon_months)
    if end_before_date:
        limit = parse_iso_date(end_before_date)
        if limit <= end:
            end = limit - timedelta(days=1)

    timeline = []
    balance = starting_balance
    cursor = start
    while cursor <= end:
        occurrences = collect_occurrences(cursor, events)
        change = daily_change(occurrences)
        balance = round_money(balance + change)

        timeline.append(DailyPoint(
            date=to_iso(cursor),
            balance=balance,
            change=change,
            events=occurrences,
            is_weekend=is_weekend(cursor),
            is_today=cursor == reference_day,
            snapshot_id=snapshot_id,
            is_past=cursor < reference_day,
        ))
        cursor += timedelta(days=1)

    return timeline


def generate_timeline(
    events: Sequence[CashFlowEvent],
    snapshots: Sequence[BalanceSnapshot],
    horizon_months: int,
    mode: str = "latest",
    today: Optional[str] = None,
) -> list[DailyPoint]:
    """Deterministic daily balance projection anchored on balance snapshots.

    Pure function of events, snapshots, horizon, mode and the reference day.
    No writes, no side effects; inputs are never mutated.

    ``latest`` projects forward from the chronologically last snapshot only.
    ``segments`` expands one segment per snapshot, each ending the day before
    the next snapshot, and concatenates them in date order. Every segment
    evaluates every event on its own; nothing carries across a boundary.
    """
    if mode not in PROJECTION_MODES:
        raise ValueError(f"unknown projection mode: {mode!r}")

    if not snapshots:
        return []

    today = to_iso(resolve_today(today))
    ordered = sorted(snapshots, key=lambda snap: snap.date)

    if mode == "latest":
        latest = ordered[-1]
        return expand_segment(
            start_date=latest.date,
            starting_balance=latest.balance,
            events=events,
            horizon_months=horizon_months,
            today=today,
            snapshot_id=latest.id,
        )

    timeline = []
    for index, snap in enumerate(ordered):
        following = ordered[index + 1] if index + 1 < len(ordered) else None
        timeline.extend(expand_segment(
            start_date=snap.date,
            starting_balance=snap.balance,
            events=events,
            horizon_months=horizon_months,
            today=today,
            end_before_date=following.date if following else None,
            snapshot_id=snap.id,
        ))
    return timeline
