# memberdir_core/constants.py

# Admission: body.timestamp must fall in [now - FRESHNESS_WINDOW_MS, now]
FRESHNESS_WINDOW_MS = 5000

# Expiry sweep: records whose body.timestamp is older than this are purged
RETENTION_WINDOW_MS = 30 * 60 * 1000

DEFAULT_STORAGE_PROVIDER = "sqlite"
DEFAULT_DB_PATH = "db/memberdir.db"
DEFAULT_DIRECTORY_URL = "http://localhost:8787"
