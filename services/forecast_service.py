### Forecast service loads an account's events and snapshots from the store and projects its balance forward.
from db import get_db
from repositories.accounts_repository import get_account_by_id
from repositories.events_repository import get_events_for_account
from repositories.preferences_repository import get_preferences
from repositories.snapshots_repository import get_snapshots_for_account
from services.forecast_cache import build_forecast


def load_forecast_inputs(conn, account_id):
    """Return (account, events, snapshots) or None when the account is unknown."""
    account = get_account_by_id(conn, account_id)
    if account is None:
        return None
    events = tuple(get_events_for_account(conn, account_id))
    snapshots = tuple(get_snapshots_for_account(conn, account_id))
    return account, events, snapshots


def calculate_account_forecast(account_id, months=None, mode="latest", today=None,
                               warning_threshold=None):
    """
    Timeline and analytics for one account.

    ``months`` defaults to the user's preferred view length and
    ``warning_threshold`` to the account's own threshold.
    Returns (account, Forecast) or None if the account does not exist.
    """
    conn = get_db()
    try:
        inputs = load_forecast_inputs(conn, account_id)
        if inputs is None:
            return None
        if months is None:
            months = get_preferences(conn).default_view_months
    finally:
        conn.close()

    account, events, snapshots = inputs
    if warning_threshold is None:
        warning_threshold = account.warning_threshold

    forecast = build_forecast(
        events,
        snapshots,
        months,
        mode=mode,
        today=today,
        warning_threshold=warning_threshold,
    )
    return account, forecast
