"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STALE_AFTER_MINUTES = 360
RECONCILE_INTERVAL_SECONDS = 5 * 60
MAX_TOGGLE_ATTEMPTS = 3
AUTOCOMPLETE_LIMIT = 10
DEFAULT_TRANSCRIPT_PATH = "history.txt"
TRANSCRIPT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
ROSTER_CSV_COLUMNS = ("SID", "OEN", "first_name", "last_name")
