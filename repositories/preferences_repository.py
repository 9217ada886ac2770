from models.account import UserPreferences


def get_preferences(conn):
    """
    Return the stored preferences.

    Falls back to defaults when the row is missing (e.g. a wiped table).
    """
    row = conn.execute(
        """
        SELECT default_view_months, chart_type, show_weekends
        FROM user_preferences
        WHERE id = 1
        """
    ).fetchone()

    if not row:
        return UserPreferences()

    return UserPreferences(
        default_view_months=row[0],
        chart_type=row[1],
        show_weekends=bool(row[2]),
    )


def save_preferences(conn, preferences: UserPreferences):
    conn.execute("DELETE FROM user_preferences WHERE id = 1")
    conn.execute(
        """
        INSERT INTO user_preferences (id, default_view_months, chart_type, show_weekends)
        VALUES (1, ?, ?, ?)
        """,
        (preferences.default_view_months, preferences.chart_type, preferences.show_weekends)
    )
