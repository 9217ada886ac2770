import logging
from dataclasses import replace

from db import get_db
from models.account import BalanceSnapshot
from models.cashflow import CashFlowEvent
from repositories.accounts_repository import get_account_by_id, update_account
from repositories.events_repository import delete_events_for_account, insert_event
from repositories.snapshots_repository import delete_snapshots_for_account, upsert_snapshot
from utils.dates import add_months, resolve_today, to_iso, utc_now_iso
from utils.ids import new_id

SAMPLE_BALANCE = 16000.0
SAMPLE_WARNING_THRESHOLD = 1000.0


def generate_sample_events(account_id, today=None):
    """A year of typical household cash flow starting on ``today``."""
    day = resolve_today(today)
    base_date = to_iso(day)
    timestamp = utc_now_iso()

    def sample(name, amount, category, event_type, **extra):
        return CashFlowEvent(
            id=new_id(),
            account_id=account_id,
            name=name,
            amount=amount,
            category=category,
            type=event_type,
            start_date=base_date,
            enabled=True,
            created_at=timestamp,
            updated_at=timestamp,
            **extra,
        )

    return [
        sample("Salary", 20000.0, "income", "monthly", monthly_day=10, notes="Net of tax"),
        sample("Credit card repayment", 6000.0, "expense", "monthly", monthly_day=11,
               notes="Last month's spending"),
        sample("Mortgage", 8000.0, "expense", "monthly", monthly_day=20),
        sample("Annual bonus", 40000.0, "income", "yearly",
               yearly_month=day.month, yearly_day=day.day, notes="Paid at year end"),
        sample("Utilities", 600.0, "expense", "monthly", monthly_day=25),
        sample("Car insurance", 4500.0, "expense", "yearly",
               yearly_month=add_months(day, 3).month, yearly_day=1),
        sample("Holiday trip", 12000.0, "expense", "once",
               once_date=to_iso(add_months(day, 5))),
    ]


def load_sample_data(account_id, today=None):
    """
    Replace an account's events and snapshots with the sample set.

    The account's balance and warning threshold are reset to the sample
    values and anchored by a manual snapshot dated ``today``.
    Returns the list of events, or None if the account does not exist.
    """
    conn = get_db()
    try:
        account = get_account_by_id(conn, account_id)
        if account is None:
            return None

        account = replace(
            account,
            initial_balance=SAMPLE_BALANCE,
            warning_threshold=SAMPLE_WARNING_THRESHOLD,
            updated_at=utc_now_iso(),
        )
        update_account(conn, account)

        delete_events_for_account(conn, account_id)
        delete_snapshots_for_account(conn, account_id)

        events = generate_sample_events(account_id, today)
        for event in events:
            insert_event(conn, event)

        upsert_snapshot(conn, BalanceSnapshot(
            id=new_id(),
            account_id=account_id,
            date=to_iso(resolve_today(today)),
            balance=SAMPLE_BALANCE,
            source="manual",
            note="Sample data",
            created_at=utc_now_iso(),
        ))
    finally:
        conn.close()

    logging.info(f"Sample data loaded into account {account_id} ({len(events)} events)")
    return events
