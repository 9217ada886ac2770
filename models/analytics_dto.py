from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class MonthlyBucket:
    month_key: str  # "YYYY-MM"
    month_label: str  # "YYYY Mon"
    income: float
    expense: float
    net: float


@dataclass(frozen=True)
class BalanceExtremes:
    min_balance: float
    min_date: str
    max_balance: float
    max_date: str


@dataclass(frozen=True)
class AnalyticsSummary:
    months: Tuple[MonthlyBucket, ...]
    extremes: BalanceExtremes
    total_income: float
    total_expense: float
    ending_balance: float
    warning_dates: Tuple[str, ...]
