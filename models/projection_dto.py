from dataclasses import dataclass
from typing import Optional, Tuple

from models.cashflow import TransactionCategory


@dataclass(frozen=True)
class EventOccurrence:
    id: str  # "{event_id}-{date}"
    event_id: str
    name: str
    category: TransactionCategory
    amount: float
    date: str


@dataclass(frozen=True)
class DailyPoint:
    date: str
    balance: float
    change: float
    events: Tuple[EventOccurrence, ...]
    is_weekend: bool
    is_today: bool
    snapshot_id: Optional[str]
    is_past: bool
