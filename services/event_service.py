import logging
from dataclasses import asdict, replace

from db import get_db
from models.cashflow import CashFlowEvent
from repositories.accounts_repository import get_account_by_id
from repositories.events_repository import (
    delete_event as repo_delete_event,
    get_event_by_id,
    get_events_for_account,
    insert_event,
    update_event as repo_update_event,
)
from services.event_validation import validate_cash_flow_event
from utils.dates import utc_now_iso
from utils.ids import new_id

EDITABLE_FIELDS = (
    "account_id", "name", "amount", "category", "type", "start_date", "end_date",
    "once_date", "monthly_day", "yearly_month", "yearly_day", "color", "notes",
    "enabled",
)


def list_events(account_id):
    conn = get_db()
    try:
        return get_events_for_account(conn, account_id)
    finally:
        conn.close()


def get_event(event_id):
    conn = get_db()
    try:
        return get_event_by_id(conn, event_id)
    finally:
        conn.close()


def add_event(account_id, payload: dict):
    """Validate and store a new event for ``account_id``.

    Returns ``{"success": True, "event": ...}`` or
    ``{"success": False, "errors": [...]}``; ``None`` if the account is unknown.
    """
    fields = {k: v for k, v in payload.items() if k in EDITABLE_FIELDS}
    fields["account_id"] = account_id
    fields.setdefault("enabled", True)

    errors = validate_cash_flow_event(fields)
    if errors:
        logging.warning(f"Rejected event for account {account_id}: {'; '.join(errors)}")
        return {"success": False, "errors": errors}

    conn = get_db()
    try:
        if get_account_by_id(conn, account_id) is None:
            return None

        timestamp = utc_now_iso()
        event = CashFlowEvent(id=new_id(), created_at=timestamp, updated_at=timestamp, **fields)
        insert_event(conn, event)
        logging.info(f"Event {event.id} created ({event.type} {event.category} {event.amount})")
        return {"success": True, "event": event}
    finally:
        conn.close()


def update_event(event_id, updates: dict):
    """Merge ``updates`` into the stored event, re-validate, and save.

    Keys explicitly set to None clear optional fields (e.g. ``end_date``);
    a None ``enabled`` leaves the flag as it was.
    """
    conn = get_db()
    try:
        current = get_event_by_id(conn, event_id)
        if current is None:
            return None

        merged = asdict(current)
        merged.update({
            k: v for k, v in updates.items()
            if k in EDITABLE_FIELDS and not (k == "enabled" and v is None)
        })

        errors = validate_cash_flow_event(merged)
        if errors:
            logging.warning(f"Rejected update for event {event_id}: {'; '.join(errors)}")
            return {"success": False, "errors": errors}

        merged["updated_at"] = utc_now_iso()
        event = CashFlowEvent(**merged)
        repo_update_event(conn, event)
        return {"success": True, "event": event}
    finally:
        conn.close()


def toggle_event(event_id, enabled: bool):
    conn = get_db()
    try:
        current = get_event_by_id(conn, event_id)
        if current is None:
            return None
        event = replace(current, enabled=enabled, updated_at=utc_now_iso())
        repo_update_event(conn, event)
        return event
    finally:
        conn.close()


def delete_event(event_id):
    conn = get_db()
    try:
        if get_event_by_id(conn, event_id) is None:
            return False
        repo_delete_event(conn, event_id)
        logging.info(f"Event {event_id} deleted")
        return True
    finally:
        conn.close()
