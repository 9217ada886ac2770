from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Optional, Tuple

import config
from models.account import BalanceSnapshot
from models.analytics_dto import AnalyticsSummary
from models.cashflow import CashFlowEvent
from models.projection_dto import DailyPoint
from services.analytics_service import summarize
from services.projection_service import generate_timeline
from utils.dates import resolve_today, to_iso


@dataclass(frozen=True)
class Forecast:
    timeline: Tuple[DailyPoint, ...]
    summary: AnalyticsSummary


@lru_cache(maxsize=config.FORECAST_CACHE_SIZE)
def _cached_forecast(
    events: Tuple[CashFlowEvent, ...],
    snapshots: Tuple[BalanceSnapshot, ...],
    horizon_months: int,
    mode: str,
    today: str,
    warning_threshold: float,
) -> Forecast:
    timeline = tuple(generate_timeline(events, snapshots, horizon_months, mode=mode, today=today))
    return Forecast(timeline=timeline, summary=summarize(timeline, warning_threshold))


def build_forecast(
    events: Iterable[CashFlowEvent],
    snapshots: Iterable[BalanceSnapshot],
    horizon_months: int,
    mode: str = "latest",
    today: Optional[str] = None,
    warning_threshold: float = 0.0,
) -> Forecast:
    """Memoized timeline + summary.

    The result is shared between callers with equal inputs and must be
    treated as read-only. ``today`` is pinned before lookup so entries never
    outlive the day they were computed for.
    """
    return _cached_forecast(
        tuple(events),
        tuple(snapshots),
        horizon_months,
        mode,
        to_iso(resolve_today(today)),
        float(warning_threshold),
    )


def clear_forecast_cache() -> None:
    _cached_forecast.cache_clear()


def forecast_cache_info():
    return _cached_forecast.cache_info()
