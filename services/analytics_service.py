"""
Analytics Engine: reduces a daily balance series into a summary.

Single pass over the series; no database access; no side effects.
"""
from typing import Iterable

from models.analytics_dto import AnalyticsSummary, BalanceExtremes, MonthlyBucket
from models.projection_dto import DailyPoint
from utils.dates import month_key, month_label, parse_iso_date
from utils.money import round_money


def summarize(series: Iterable[DailyPoint], warning_threshold: float) -> AnalyticsSummary:
    """
    Aggregate a chronological daily series.

    Args:
        series: Daily points in date order (as produced by generate_timeline).
        warning_threshold: Balances strictly below this are warning dates.

    Returns:
        AnalyticsSummary with months sorted by ``YYYY-MM`` key. Ties on the
        balance extremes keep the earliest date seen.
    """
    buckets = {}
    total_income = 0.0
    total_expense = 0.0
    min_balance = float("inf")
    max_balance = float("-inf")
    min_date = ""
    max_date = ""
    ending_balance = 0.0
    warning_dates = []

    for point in series:
        day = parse_iso_date(point.date)
        key = month_key(day)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = {"label": month_label(day), "income": 0.0, "expense": 0.0}
            buckets[key] = bucket

        for occ in point.events:
            if occ.category == "income":
                bucket["income"] += occ.amount
                total_income += occ.amount
            else:
                bucket["expense"] += occ.amount
                total_expense += occ.amount

        if point.balance < min_balance:
            min_balance = point.balance
            min_date = point.date
        if point.balance > max_balance:
            max_balance = point.balance
            max_date = point.date

        if point.balance < warning_threshold:
            warning_dates.append(point.date)

        ending_balance = point.balance

    months = tuple(
        MonthlyBucket(
            month_key=key,
            month_label=buckets[key]["label"],
            income=round_money(buckets[key]["income"]),
            expense=round_money(buckets[key]["expense"]),
            net=round_money(buckets[key]["income"] - buckets[key]["expense"]),
        )
        for key in sorted(buckets)
    )

    # empty series: extremes default to zero
    if min_balance == float("inf"):
        min_balance = 0.0
        max_balance = 0.0

    return AnalyticsSummary(
        months=months,
        extremes=BalanceExtremes(
            min_balance=min_balance,
            min_date=min_date,
            max_balance=max_balance,
            max_date=max_date,
        ),
        total_income=round_money(total_income),
        total_expense=round_money(total_expense),
        ending_balance=ending_balance,
        warning_dates=tuple(warning_dates),
    )
