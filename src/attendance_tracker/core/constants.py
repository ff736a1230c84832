"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_GRACE_PERIOD_MINUTES = 5
DEFAULT_PUNCH_CAS_RETRIES = 3
DEFAULT_DB_CONNECT_RETRIES = 3
DEFAULT_DB_RETRY_BACKOFF_SECONDS = 0.5
DEFAULT_DB_CONNECTION_TIMEOUT = 10

TIME_FORMAT = "%H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"
