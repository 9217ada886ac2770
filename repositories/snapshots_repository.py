from models.account import BalanceSnapshot
from utils.dates import parse_iso_date

# -----------------------------
# Balance Snapshots Repository
# -----------------------------


def _row_to_snapshot(row):
    return BalanceSnapshot(
        id=row[0],
        account_id=row[1],
        date=row[2].isoformat(),
        balance=row[3],
        source=row[4],
        note=row[5],
        created_at=row[6],
    )


def get_snapshots_for_account(conn, account_id):
    """Return an account's snapshots ordered by date ascending."""
    rows = conn.execute(
        """
        SELECT id, account_id, date, balance, source, note, created_at
        FROM balance_snapshots
        WHERE account_id = ?
        ORDER BY date
        """,
        (account_id,)
    ).fetchall()
    return [_row_to_snapshot(r) for r in rows]


def get_all_snapshots(conn):
    rows = conn.execute(
        """
        SELECT id, account_id, date, balance, source, note, created_at
        FROM balance_snapshots
        ORDER BY account_id, date
        """
    ).fetchall()
    return [_row_to_snapshot(r) for r in rows]


def get_snapshot_by_id(conn, snapshot_id):
    row = conn.execute(
        """
        SELECT id, account_id, date, balance, source, note, created_at
        FROM balance_snapshots
        WHERE id = ?
        """,
        (snapshot_id,)
    ).fetchone()
    return _row_to_snapshot(row) if row else None


def upsert_snapshot(conn, snapshot: BalanceSnapshot):
    """
    Store a snapshot, replacing any existing one on the same account and date.

    Returns True when an existing snapshot was replaced.
    """
    day = parse_iso_date(snapshot.date)
    existing = conn.execute(
        "SELECT id FROM balance_snapshots WHERE account_id = ? AND date = ?",
        (snapshot.account_id, day)
    ).fetchone()

    if existing:
        conn.execute("DELETE FROM balance_snapshots WHERE id = ?", (existing[0],))

    conn.execute(
        """
        INSERT INTO balance_snapshots
        (id, account_id, date, balance, source, note, created_at)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        (
            snapshot.id, snapshot.account_id, day, snapshot.balance,
            snapshot.source, snapshot.note, snapshot.created_at,
        )
    )
    return bool(existing)


def delete_snapshot(conn, snapshot_id):
    conn.execute("DELETE FROM balance_snapshots WHERE id = ?", (snapshot_id,))


def delete_snapshots_for_account(conn, account_id):
    conn.execute("DELETE FROM balance_snapshots WHERE account_id = ?", (account_id,))
