import os

APP_VERSION = "1.0.0"

DB_FILE = os.getenv("FORECAST_DB_FILE", "forecast.duckdb")

LOG_FILE = os.getenv("FORECAST_LOG_FILE", "")
LOG_LEVEL = os.getenv("FORECAST_LOG_LEVEL", "INFO").upper()

FORECAST_CACHE_SIZE = int(os.getenv("FORECAST_CACHE_SIZE", "128"))
MAX_HORIZON_MONTHS = int(os.getenv("MAX_HORIZON_MONTHS", "120"))

DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "USD")
DEFAULT_ACCOUNT_NAME = "Primary Account"
DEFAULT_INITIAL_BALANCE = 10000.0
DEFAULT_WARNING_THRESHOLD = 1000.0
DEFAULT_VIEW_MONTHS = 12

# Rotated through when new accounts are created
ACCOUNT_COLORS = ["#3b82f6", "#10b981", "#f97316", "#a855f7", "#ef4444", "#14b8a6", "#64748b"]
ACCOUNT_ICONS = ["wallet", "fund", "building", "shield", "card", "piggy", "coins"]
