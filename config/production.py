import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
    "connection_timeout": int(os.getenv("DB_CONNECTION_TIMEOUT", "5")),
    "connect_retries": int(os.getenv("DB_CONNECT_RETRIES", "5")),
    "retry_backoff_seconds": float(os.getenv("DB_RETRY_BACKOFF_SECONDS", "0.5")),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

DEFAULT_GRACE_PERIOD_MINUTES = int(os.getenv("DEFAULT_GRACE_PERIOD_MINUTES", "5"))
ALLOTMENT_OVERLAP_POLICY = os.getenv("ALLOTMENT_OVERLAP_POLICY", "truncate_prior")
ATTENDANCE_STATUS_POLICY = os.getenv("ATTENDANCE_STATUS_POLICY", "latest")
PUNCH_CAS_RETRIES = int(os.getenv("PUNCH_CAS_RETRIES", "3"))
