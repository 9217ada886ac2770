"""
State transfer: JSON export/import of the whole store.

The envelope matches what the client UI persists locally:
``{"version", "timestamp", "state": {"account", "accounts", "events",
"preferences", "snapshots"}}`` with camelCase record keys.
"""
import json
import logging
from dataclasses import asdict, fields

import duckdb

import config
from db import get_db
from helpers.normalize import denormalize_row, normalize_row
from models.account import SNAPSHOT_SOURCES, AccountConfig, BalanceSnapshot, UserPreferences
from models.cashflow import CashFlowEvent
from repositories.accounts_repository import delete_all_accounts, insert_account
from repositories.accounts_repository import list_accounts as repo_list_accounts
from repositories.events_repository import get_all_events, insert_event
from repositories.preferences_repository import get_preferences, save_preferences
from repositories.snapshots_repository import get_all_snapshots, upsert_snapshot
from services.account_service import create_default_account
from services.event_validation import validate_cash_flow_event
from utils.dates import is_valid_iso_date, resolve_today, to_iso, utc_now_iso
from utils.ids import new_id
from utils.money import parse_money


def _field_names(model):
    return {f.name for f in fields(model)}


def export_state() -> str:
    """Serialize accounts, events, snapshots and preferences as a JSON envelope."""
    conn = get_db()
    try:
        accounts = repo_list_accounts(conn)
        events = get_all_events(conn)
        snapshots = get_all_snapshots(conn)
        preferences = get_preferences(conn)
    finally:
        conn.close()

    account_rows = [denormalize_row(asdict(a)) for a in accounts]
    state = {
        "version": config.APP_VERSION,
        "account": account_rows[0] if account_rows else None,
        "accounts": account_rows,
        "events": [denormalize_row(asdict(e)) for e in events],
        "preferences": denormalize_row(asdict(preferences)),
        "snapshots": [denormalize_row(asdict(s)) for s in snapshots],
    }
    payload = {
        "version": config.APP_VERSION,
        "timestamp": utc_now_iso(),
        "state": state,
    }
    return json.dumps(payload, indent=2)


def _parse_state(content: str) -> dict:
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ValueError("Import file format is invalid") from exc

    if not isinstance(parsed, dict) or not isinstance(parsed.get("state"), dict):
        raise ValueError("Import file format is invalid")
    return parsed["state"]


def _build_account(row: dict) -> AccountConfig:
    data = normalize_row(row, _field_names(AccountConfig))
    timestamp = utc_now_iso()
    data.setdefault("id", new_id())
    data.setdefault("name", config.DEFAULT_ACCOUNT_NAME)
    data.setdefault("currency", config.DEFAULT_CURRENCY)
    data.setdefault("created_at", timestamp)
    data.setdefault("updated_at", timestamp)
    data["initial_balance"] = parse_money(data.get("initial_balance", 0))
    data["warning_threshold"] = parse_money(data.get("warning_threshold", 0))
    return AccountConfig(**data)


def _build_event(row: dict, default_account_id: str):
    data = normalize_row(row, _field_names(CashFlowEvent))
    data.setdefault("account_id", default_account_id)
    if data.get("enabled") is None:
        data["enabled"] = True
    try:
        data["amount"] = parse_money(data.get("amount"))
    except ValueError:
        data["amount"] = None

    errors = validate_cash_flow_event(data)
    if errors:
        logging.warning(f"Skipping imported event {data.get('id')}: {'; '.join(errors)}")
        return None

    timestamp = utc_now_iso()
    data.setdefault("id", new_id())
    data.setdefault("created_at", timestamp)
    data.setdefault("updated_at", timestamp)
    return CashFlowEvent(**data)


def _build_snapshot(row: dict, default_account_id: str):
    data = normalize_row(row, _field_names(BalanceSnapshot))
    if not is_valid_iso_date(data.get("date")):
        logging.warning(f"Skipping imported snapshot {data.get('id')}: invalid date")
        return None
    data.setdefault("id", new_id())
    data.setdefault("account_id", default_account_id)
    data.setdefault("created_at", utc_now_iso())
    if data.get("source") not in SNAPSHOT_SOURCES:
        data["source"] = "import"
    data["balance"] = parse_money(data.get("balance", 0))
    return BalanceSnapshot(**data)


def _build_preferences(row) -> UserPreferences:
    if not isinstance(row, dict):
        return UserPreferences(default_view_months=config.DEFAULT_VIEW_MONTHS)
    data = normalize_row(row, _field_names(UserPreferences))
    if data.get("chart_type") not in ("line", "area"):
        data.pop("chart_type", None)
    return UserPreferences(**{"default_view_months": config.DEFAULT_VIEW_MONTHS, **data})


def _drop_duplicate_ids(records, kind):
    """Keep the first record for each id; later repeats are logged and skipped."""
    seen = set()
    unique = []
    for record in records:
        if record.id in seen:
            logging.warning(f"Skipping imported {kind} {record.id}: duplicate id")
            continue
        seen.add(record.id)
        unique.append(record)
    return unique


def import_state(content: str, today=None) -> dict:
    """
    Replace the whole store with the contents of an exported envelope.

    Missing sections fall back to defaults. Invalid events and snapshots, and
    records repeating an id, are skipped rather than aborting the import.
    Accounts without any snapshot get an ``import`` snapshot from their
    initial balance, dated ``today``.

    The store is replaced in a single transaction: if any write fails the
    previous contents are kept.

    Raises:
        ValueError: the content is not JSON, has no ``state`` object, or
            holds records the store rejects.
    """
    state = _parse_state(content)

    account_rows = state.get("accounts") or ([state["account"]] if state.get("account") else [])
    accounts = _drop_duplicate_ids(
        [_build_account(r) for r in account_rows if isinstance(r, dict)], "account"
    )
    default_account_id = accounts[0].id if accounts else None

    events = []
    snapshots = []
    if accounts:
        known_ids = {a.id for a in accounts}
        for row in state.get("events") or []:
            event = _build_event(row, default_account_id) if isinstance(row, dict) else None
            if event is not None and event.account_id in known_ids:
                events.append(event)
        events = _drop_duplicate_ids(events, "event")

        # later snapshots on the same account and date win
        by_day = {}
        for row in state.get("snapshots") or []:
            snapshot = _build_snapshot(row, default_account_id) if isinstance(row, dict) else None
            if snapshot is not None and snapshot.account_id in known_ids:
                by_day[(snapshot.account_id, snapshot.date)] = snapshot
        snapshots = _drop_duplicate_ids(by_day.values(), "snapshot")

        anchored = {s.account_id for s in snapshots}
        for account in accounts:
            if account.id not in anchored:
                snapshots.append(BalanceSnapshot(
                    id=new_id(),
                    account_id=account.id,
                    date=to_iso(resolve_today(today)),
                    balance=account.initial_balance,
                    source="import",
                    created_at=account.created_at,
                ))

    preferences = _build_preferences(state.get("preferences"))

    conn = get_db()
    try:
        conn.begin()
        try:
            delete_all_accounts(conn)
            if not accounts:
                create_default_account(conn)
            for account in accounts:
                insert_account(conn, account)
            for event in events:
                insert_event(conn, event)
            for snapshot in snapshots:
                upsert_snapshot(conn, snapshot)
            save_preferences(conn, preferences)
            conn.commit()
        except duckdb.Error as e:
            conn.rollback()
            logging.error(f"State import rolled back: {e}")
            raise ValueError("Import file format is invalid") from e
        except Exception:
            conn.rollback()
            raise
    finally:
        conn.close()

    summary = {
        "accounts": max(len(accounts), 1),
        "events": len(events),
        "snapshots": len(snapshots),
    }
    logging.info(f"State imported: {summary}")
    return summary


def reset_state():
    """Wipe the store back to a single default account and default preferences."""
    conn = get_db()
    try:
        delete_all_accounts(conn)
        account = create_default_account(conn)
        save_preferences(conn, UserPreferences(default_view_months=config.DEFAULT_VIEW_MONTHS))
    finally:
        conn.close()
    logging.info("State reset to defaults")
    return account
