import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker_test"),
    "connection_timeout": 2,
    "connect_retries": 1,
    "retry_backoff_seconds": 0,
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

DEFAULT_GRACE_PERIOD_MINUTES = 5
ALLOTMENT_OVERLAP_POLICY = "truncate_prior"
ATTENDANCE_STATUS_POLICY = "latest"
PUNCH_CAS_RETRIES = 3
