import logging
from dataclasses import replace

import config
from db import get_db
from models.account import AccountConfig, BalanceSnapshot, UserPreferences
from repositories.accounts_repository import (
    count_accounts,
    delete_account as repo_delete_account,
    get_account_by_id,
    insert_account,
    list_accounts as repo_list_accounts,
    update_account as repo_update_account,
)
from repositories.preferences_repository import get_preferences as repo_get_preferences
from repositories.preferences_repository import save_preferences
from repositories.snapshots_repository import (
    delete_snapshot as repo_delete_snapshot,
    get_snapshot_by_id,
    get_snapshots_for_account,
    upsert_snapshot,
)
from utils.dates import resolve_today, to_iso, utc_now_iso
from utils.ids import new_id

ACCOUNT_FIELDS = (
    "name", "type_label", "initial_balance", "currency",
    "warning_threshold", "color", "icon_key",
)


def _new_account(conn, name, initial_balance, currency, warning_threshold,
                 type_label=None, color=None, icon_key=None):
    # colors and icons rotate with the number of existing accounts
    position = count_accounts(conn)
    timestamp = utc_now_iso()
    return AccountConfig(
        id=new_id(),
        name=name,
        type_label=type_label,
        initial_balance=initial_balance,
        currency=currency,
        warning_threshold=warning_threshold,
        color=color or config.ACCOUNT_COLORS[position % len(config.ACCOUNT_COLORS)],
        icon_key=icon_key or config.ACCOUNT_ICONS[position % len(config.ACCOUNT_ICONS)],
        created_at=timestamp,
        updated_at=timestamp,
    )


def _initial_snapshot(account: AccountConfig, today=None):
    return BalanceSnapshot(
        id=new_id(),
        account_id=account.id,
        date=to_iso(resolve_today(today)),
        balance=account.initial_balance,
        source="initial",
        created_at=account.created_at,
    )


def create_default_account(conn):
    """Insert the "Primary Account" and its initial snapshot dated today."""
    account = _new_account(
        conn,
        name=config.DEFAULT_ACCOUNT_NAME,
        type_label="Cash",
        initial_balance=config.DEFAULT_INITIAL_BALANCE,
        currency=config.DEFAULT_CURRENCY,
        warning_threshold=config.DEFAULT_WARNING_THRESHOLD,
    )
    insert_account(conn, account)
    upsert_snapshot(conn, _initial_snapshot(account))
    return account


def list_accounts():
    return repo_list_accounts()


def get_account(account_id):
    conn = get_db()
    try:
        return get_account_by_id(conn, account_id)
    finally:
        conn.close()


def create_account(*, name, initial_balance=0.0, currency=None,
                   warning_threshold=0.0, type_label=None, color=None,
                   icon_key=None, today=None):
    """Create an account anchored by an ``initial`` snapshot on ``today``."""
    conn = get_db()
    try:
        account = _new_account(
            conn,
            name=name,
            initial_balance=initial_balance,
            currency=currency or config.DEFAULT_CURRENCY,
            warning_threshold=warning_threshold,
            type_label=type_label,
            color=color,
            icon_key=icon_key,
        )
        insert_account(conn, account)
        upsert_snapshot(conn, _initial_snapshot(account, today))
        logging.info(f"Account {account.id} created ({account.name})")
        return account
    finally:
        conn.close()


def update_account(account_id, updates: dict):
    """Apply a partial update; unknown keys are ignored. Returns None if missing."""
    conn = get_db()
    try:
        account = get_account_by_id(conn, account_id)
        if account is None:
            return None

        changes = {k: v for k, v in updates.items() if k in ACCOUNT_FIELDS and v is not None}
        account = replace(account, updated_at=utc_now_iso(), **changes)
        repo_update_account(conn, account)
        return account
    finally:
        conn.close()


def delete_account(account_id):
    """
    Delete an account and everything it owns.

    The last remaining account cannot be deleted; returns False in that case
    and when the account does not exist.
    """
    conn = get_db()
    try:
        if get_account_by_id(conn, account_id) is None:
            return False
        if count_accounts(conn) <= 1:
            logging.warning(f"Refusing to delete last account {account_id}")
            return False
        repo_delete_account(conn, account_id)
        logging.info(f"Account {account_id} deleted")
        return True
    finally:
        conn.close()


# -----------------------------
# Balance snapshots
# -----------------------------

def list_snapshots(account_id):
    conn = get_db()
    try:
        return get_snapshots_for_account(conn, account_id)
    finally:
        conn.close()


def record_snapshot(account_id, *, date, balance, source="manual", note=None):
    """Record a calibration point; a snapshot on the same date is replaced."""
    snapshot = BalanceSnapshot(
        id=new_id(),
        account_id=account_id,
        date=date,
        balance=balance,
        source=source,
        note=note,
        created_at=utc_now_iso(),
    )
    conn = get_db()
    try:
        replaced = upsert_snapshot(conn, snapshot)
    finally:
        conn.close()

    if replaced:
        logging.info(f"Snapshot for account {account_id} on {date} replaced")
    else:
        logging.info(f"Snapshot for account {account_id} on {date} recorded")
    return snapshot


def delete_snapshot(snapshot_id):
    conn = get_db()
    try:
        if get_snapshot_by_id(conn, snapshot_id) is None:
            return False
        repo_delete_snapshot(conn, snapshot_id)
        return True
    finally:
        conn.close()


# -----------------------------
# Preferences
# -----------------------------

def get_preferences():
    conn = get_db()
    try:
        return repo_get_preferences(conn)
    finally:
        conn.close()


def update_preferences(updates: dict) -> UserPreferences:
    conn = get_db()
    try:
        current = repo_get_preferences(conn)
        changes = {
            k: v for k, v in updates.items()
            if k in ("default_view_months", "chart_type", "show_weekends") and v is not None
        }
        preferences = replace(current, **changes)
        save_preferences(conn, preferences)
        return preferences
    finally:
        conn.close()
