from models.cashflow import CashFlowEvent
from utils.dates import parse_iso_date

# -----------------------------
# Cash-flow Events Repository
# -----------------------------

EVENT_COLUMNS = """
    id, account_id, name, amount, category, type, start_date, end_date,
    once_date, monthly_day, yearly_month, yearly_day, color, notes, enabled,
    created_at, updated_at
"""


def _iso(value):
    # DuckDB hands DATE columns back as datetime.date
    return value.isoformat() if value is not None else None


def _date_param(value):
    return parse_iso_date(value) if value else None


def _row_to_event(row):
    return CashFlowEvent(
        id=row[0],
        account_id=row[1],
        name=row[2],
        amount=row[3],
        category=row[4],
        type=row[5],
        start_date=_iso(row[6]),
        end_date=_iso(row[7]),
        once_date=_iso(row[8]),
        monthly_day=row[9],
        yearly_month=row[10],
        yearly_day=row[11],
        color=row[12],
        notes=row[13],
        enabled=bool(row[14]),
        created_at=row[15],
        updated_at=row[16],
    )


def get_events_for_account(conn, account_id):
    """
    Return all events for an account.

    Events are kept unordered in the table and sorted here, at read time,
    by start date (id breaks ties so the order is stable).
    """
    rows = conn.execute(
        f"""
        SELECT {EVENT_COLUMNS}
        FROM cash_flow_events
        WHERE account_id = ?
        ORDER BY start_date, id
        """,
        (account_id,)
    ).fetchall()
    return [_row_to_event(r) for r in rows]


def get_all_events(conn):
    rows = conn.execute(
        f"SELECT {EVENT_COLUMNS} FROM cash_flow_events ORDER BY start_date, id"
    ).fetchall()
    return [_row_to_event(r) for r in rows]


def get_event_by_id(conn, event_id):
    row = conn.execute(
        f"SELECT {EVENT_COLUMNS} FROM cash_flow_events WHERE id = ?",
        (event_id,)
    ).fetchone()
    return _row_to_event(row) if row else None


def insert_event(conn, event: CashFlowEvent):
    conn.execute(
        f"""
        INSERT INTO cash_flow_events ({EVENT_COLUMNS})
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            event.id, event.account_id, event.name, event.amount, event.category,
            event.type, _date_param(event.start_date), _date_param(event.end_date),
            _date_param(event.once_date), event.monthly_day, event.yearly_month,
            event.yearly_day, event.color, event.notes, event.enabled,
            event.created_at, event.updated_at,
        )
    )


def update_event(conn, event: CashFlowEvent):
    conn.execute(
        """
        UPDATE cash_flow_events
        SET account_id = ?, name = ?, amount = ?, category = ?, type = ?,
            start_date = ?, end_date = ?, once_date = ?, monthly_day = ?,
            yearly_month = ?, yearly_day = ?, color = ?, notes = ?,
            enabled = ?, updated_at = ?
        WHERE id = ?
        """,
        (
            event.account_id, event.name, event.amount, event.category, event.type,
            _date_param(event.start_date), _date_param(event.end_date),
            _date_param(event.once_date), event.monthly_day, event.yearly_month,
            event.yearly_day, event.color, event.notes, event.enabled,
            event.updated_at, event.id,
        )
    )


def delete_event(conn, event_id):
    conn.execute("DELETE FROM cash_flow_events WHERE id = ?", (event_id,))


def delete_events_for_account(conn, account_id):
    conn.execute("DELETE FROM cash_flow_events WHERE account_id = ?", (account_id,))
