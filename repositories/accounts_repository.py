from db import get_db
from models.account import AccountConfig

# -----------------------------
# Accounts Repository
# -----------------------------

ACCOUNT_COLUMNS = """
    id, name, type_label, initial_balance, currency, warning_threshold,
    color, icon_key, created_at, updated_at
"""


def _row_to_account(row):
    return AccountConfig(
        id=row[0],
        name=row[1],
        type_label=row[2],
        initial_balance=row[3],
        currency=row[4],
        warning_threshold=row[5],
        color=row[6],
        icon_key=row[7],
        created_at=row[8],
        updated_at=row[9],
    )


def list_accounts(conn=None):
    """Return all accounts, oldest first."""
    own_conn = False
    if conn is None:
        conn = get_db()
        own_conn = True

    try:
        rows = conn.execute(
            f"SELECT {ACCOUNT_COLUMNS} FROM accounts ORDER BY created_at, id"
        ).fetchall()
        return [_row_to_account(r) for r in rows]
    finally:
        if own_conn:
            conn.close()


def get_account_by_id(conn, account_id):
    """Return a single account or None if not found."""
    row = conn.execute(
        f"SELECT {ACCOUNT_COLUMNS} FROM accounts WHERE id = ?",
        (account_id,)
    ).fetchone()
    return _row_to_account(row) if row else None


def count_accounts(conn):
    return conn.execute("SELECT COUNT(*) FROM accounts").fetchone()[0]


def insert_account(conn, account: AccountConfig):
    conn.execute(
        f"INSERT INTO accounts ({ACCOUNT_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
        (
            account.id, account.name, account.type_label, account.initial_balance,
            account.currency, account.warning_threshold, account.color,
            account.icon_key, account.created_at, account.updated_at,
        )
    )


def update_account(conn, account: AccountConfig):
    conn.execute(
        """
        UPDATE accounts
        SET name = ?, type_label = ?, initial_balance = ?, currency = ?,
            warning_threshold = ?, color = ?, icon_key = ?, updated_at = ?
        WHERE id = ?
        """,
        (
            account.name, account.type_label, account.initial_balance,
            account.currency, account.warning_threshold, account.color,
            account.icon_key, account.updated_at, account.id,
        )
    )


def delete_account(conn, account_id):
    """Delete an account together with its events and snapshots."""
    conn.execute("DELETE FROM cash_flow_events WHERE account_id = ?", (account_id,))
    conn.execute("DELETE FROM balance_snapshots WHERE account_id = ?", (account_id,))
    conn.execute("DELETE FROM accounts WHERE id = ?", (account_id,))


def delete_all_accounts(conn):
    conn.execute("DELETE FROM cash_flow_events")
    conn.execute("DELETE FROM balance_snapshots")
    conn.execute("DELETE FROM accounts")
