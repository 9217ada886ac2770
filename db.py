import duckdb
import logging

import config

# -----------------------------
# Logging
# -----------------------------
_log_options = {
    "level": getattr(logging, config.LOG_LEVEL, logging.INFO),
    "format": "%(asctime)s [%(levelname)s] %(message)s",
}
if config.LOG_FILE:
    _log_options["filename"] = config.LOG_FILE
logging.basicConfig(**_log_options)

def log_info(msg):
    logging.info(msg)

def log_error(msg):
    logging.error(msg)

# -----------------------------
# Get a DB connection
# -----------------------------
def get_db():
    """
    Returns a new DuckDB connection.
    """
    return duckdb.connect(config.DB_FILE)

# -----------------------------
# Initialize database schema
# -----------------------------
def init_db():
    conn = get_db()
    try:
        # Accounts table
        conn.execute("""
        CREATE TABLE IF NOT EXISTS accounts (
            id VARCHAR PRIMARY KEY,
            name VARCHAR NOT NULL,
            type_label VARCHAR,
            initial_balance DOUBLE NOT NULL DEFAULT 0,
            currency VARCHAR NOT NULL,
            warning_threshold DOUBLE NOT NULL DEFAULT 0,
            color VARCHAR,
            icon_key VARCHAR,
            created_at VARCHAR NOT NULL,
            updated_at VARCHAR NOT NULL
        );
        """)
        log_info("Accounts table ensured.")

        # Cash-flow events table
        conn.execute("""
        CREATE TABLE IF NOT EXISTS cash_flow_events (
            id VARCHAR PRIMARY KEY,
            account_id VARCHAR NOT NULL,
            name VARCHAR NOT NULL,
            amount DOUBLE NOT NULL,
            category VARCHAR CHECK(category IN ('income','expense')),
            type VARCHAR CHECK(type IN ('once','monthly','yearly')),
            start_date DATE NOT NULL,
            end_date DATE,
            once_date DATE,
            monthly_day INTEGER,
            yearly_month INTEGER,
            yearly_day INTEGER,
            color VARCHAR,
            notes TEXT,
            enabled BOOLEAN DEFAULT TRUE,
            created_at VARCHAR NOT NULL,
            updated_at VARCHAR NOT NULL
        );
        """)
        log_info("Cash-flow events table ensured.")

        # Balance snapshots table
        conn.execute("""
        CREATE TABLE IF NOT EXISTS balance_snapshots (
            id VARCHAR PRIMARY KEY,
            account_id VARCHAR NOT NULL,
            date DATE NOT NULL,
            balance DOUBLE NOT NULL,
            source VARCHAR CHECK(source IN ('initial','manual','import')),
            note TEXT,
            created_at VARCHAR NOT NULL,
            UNIQUE(account_id, date)
        );
        """)
        log_info("Balance snapshots table ensured.")

        # Preferences (single row)
        conn.execute("""
        CREATE TABLE IF NOT EXISTS user_preferences (
            id INTEGER PRIMARY KEY,
            default_view_months INTEGER NOT NULL,
            chart_type VARCHAR CHECK(chart_type IN ('line','area')),
            show_weekends BOOLEAN NOT NULL
        );
        """)
        log_info("Preferences table ensured.")

        # Indexes
        conn.execute("CREATE INDEX IF NOT EXISTS idx_events_account ON cash_flow_events(account_id, start_date);")
        conn.execute("CREATE INDEX IF NOT EXISTS idx_snapshots_account_date ON balance_snapshots(account_id, date);")
        log_info("Indexes created/ensured.")

        # Default preferences
        conn.execute("""
        INSERT INTO user_preferences (id, default_view_months, chart_type, show_weekends)
        SELECT 1, ?, 'line', TRUE
        WHERE NOT EXISTS (SELECT 1 FROM user_preferences WHERE id = 1);
        """, (config.DEFAULT_VIEW_MONTHS,))
        log_info("Default preferences ensured.")

        # Default Primary Account
        has_account = conn.execute("SELECT 1 FROM accounts LIMIT 1").fetchone()
        if not has_account:
            # imported here to keep repositories free to import db at module level
            from services.account_service import create_default_account
            create_default_account(conn)
            log_info("Default primary account ensured.")

    except Exception as e:
        log_error(f"Error initializing DB: {e}")
        raise
    finally:
        conn.close()
        log_info("Database setup complete and connection closed.")
