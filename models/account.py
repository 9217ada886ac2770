from dataclasses import dataclass
from typing import Literal, Optional

SnapshotSource = Literal["initial", "manual", "import"]
ChartType = Literal["line", "area"]

SNAPSHOT_SOURCES = ("initial", "manual", "import")


@dataclass(frozen=True)
class AccountConfig:
    id: str
    name: str
    initial_balance: float
    currency: str
    warning_threshold: float
    created_at: str
    updated_at: str
    type_label: Optional[str] = None  # display only, e.g. "Cash", "Long-term"
    color: Optional[str] = None
    icon_key: Optional[str] = None


@dataclass(frozen=True)
class BalanceSnapshot:
    """Balance known to be correct at the end of ``date``."""
    id: str
    date: str
    balance: float
    source: SnapshotSource
    account_id: Optional[str] = None
    note: Optional[str] = None
    created_at: Optional[str] = None


@dataclass(frozen=True)
class UserPreferences:
    default_view_months: int = 12
    chart_type: ChartType = "line"
    show_weekends: bool = True
