import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "presence_kiosk"),
}

# Human-readable mirror of the event log (search / full-log pages)
TRANSCRIPT_PATH = os.getenv("TRANSCRIPT_PATH", "history.txt")

# Students signed in longer than this are signed out automatically
STALE_AFTER_MINUTES = int(os.getenv("STALE_AFTER_MINUTES", "360"))
RECONCILE_INTERVAL_SECONDS = int(os.getenv("RECONCILE_INTERVAL_SECONDS", "300"))
RECONCILER_ENABLED = bool(int(os.getenv("RECONCILER_ENABLED", "1")))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
