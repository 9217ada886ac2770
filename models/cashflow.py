from dataclasses import dataclass
from typing import Literal, Optional

RecurrenceType = Literal["once", "monthly", "yearly"]
TransactionCategory = Literal["income", "expense"]

RECURRENCE_TYPES = ("once", "monthly", "yearly")
TRANSACTION_CATEGORIES = ("income", "expense")


@dataclass(frozen=True)
class CashFlowEvent:
    """A recurrence rule for money moving in or out of an account.

    Dates are ISO strings (``YYYY-MM-DD``). Only the kind-specific field
    matching ``type`` is read: ``once_date`` for once, ``monthly_day`` for
    monthly, ``yearly_month``/``yearly_day`` for yearly.
    """
    id: str
    name: str
    amount: float
    category: TransactionCategory
    type: RecurrenceType
    start_date: str
    end_date: Optional[str] = None
    once_date: Optional[str] = None
    monthly_day: Optional[int] = None
    yearly_month: Optional[int] = None
    yearly_day: Optional[int] = None
    enabled: bool = True
    account_id: Optional[str] = None
    color: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
