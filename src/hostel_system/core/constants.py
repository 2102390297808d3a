"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "Asia/Kolkata"
DEFAULT_SWEEP_HOUR = 23
DEFAULT_SWEEP_MINUTE = 59

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_DB_TIMEOUT_SECONDS = 10
DEFAULT_DB_READ_RETRIES = 3
READ_RETRY_BASE_DELAY_SECONDS = 0.05

MYSQL_DUPLICATE_ENTRY = 1062
