SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"
JSON_STORE_PATH = ""

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "staff_attendance_test",
}

LATE_START_HOUR = 9
LATE_END_HOUR = 12

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
