import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "presence_kiosk_test"),
}

TRANSCRIPT_PATH = os.getenv("TRANSCRIPT_PATH", "history-test.txt")

STALE_AFTER_MINUTES = 360
RECONCILE_INTERVAL_SECONDS = 300
RECONCILER_ENABLED = False

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
