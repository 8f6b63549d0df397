import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# memory | json | mysql
STORE_BACKEND = os.getenv("STORE_BACKEND", "json")
JSON_STORE_PATH = os.getenv("JSON_STORE_PATH", "var/attendance.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staff_attendance"),
}

LATE_START_HOUR = int(os.getenv("LATE_START_HOUR", "9"))
LATE_END_HOUR = int(os.getenv("LATE_END_HOUR", "12"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled and STORE_BACKEND=mysql, schema.sql is applied on startup (idempotent).
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
